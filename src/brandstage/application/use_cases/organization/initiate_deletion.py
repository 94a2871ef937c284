"""Initiate organization deletion use case."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import structlog

from brandstage.application.dto import DeletionInitiated
from brandstage.application.ports import EmailSender, Identity
from brandstage.domain.entities import OrganizationDeletionRequest
from brandstage.domain.exceptions import AuthorizationError, ConflictError, NotFound, ValidationError
from brandstage.domain.permissions import has_permission
from brandstage.domain.permissions.catalog import ORG_DELETE
from brandstage.domain.value_objects import DeletionStatus, InvitationToken

logger = structlog.get_logger()

DELETION_TOKEN_TTL = timedelta(hours=24)
DELETION_CONFIRM_TEMPLATE = "organization-deletion-confirm"


def format_email_date(value: datetime) -> str:
    return f"{value.day} {value:%B %Y %H:%M}"


class InitiateOrganizationDeletionUseCase:
    """Open a deletion request that must be confirmed by email."""

    def __init__(
        self,
        unit_of_work_factory: type,
        email_sender: EmailSender | None = None,
        app_url: str = "",
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._email_sender = email_sender
        self._app_url = app_url.rstrip("/")

    async def execute(
        self, actor: Identity, organization_id: UUID, confirmation_name: str
    ) -> DeletionInitiated:
        """Write the request and the organization back-reference together."""
        if not actor.email:
            raise ValidationError("User account has no email address")
        if not confirmation_name or not confirmation_name.strip():
            raise ValidationError("confirmation_name is required")

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            org = await uow.organizations.get_by_id(organization_id)
            if not org:
                raise NotFound("Organization", organization_id)
            if confirmation_name.strip().lower() != org.name.strip().lower():
                raise ValidationError("Organization name does not match")

            member = await uow.members.get_for_user(organization_id, actor.user_id)
            if not member:
                raise AuthorizationError("You are not a member of this organization")
            if not has_permission(member, ORG_DELETE):
                raise AuthorizationError("You do not have permission to delete this organization")

            if org.deletion_request_id:
                existing = await uow.deletion_requests.get_by_id(
                    org.deletion_request_id, for_update=True
                )
                if existing and existing.blocks_new_request(now):
                    raise ConflictError(
                        "A deletion request is already pending for this organization",
                        existing_id=existing.id,
                    )
                if existing and existing.status == DeletionStatus.PENDING_EMAIL:
                    existing.status = DeletionStatus.CANCELLED
                    await uow.deletion_requests.update(existing)
                    logger.info("deletion_request_lapsed", request_id=str(existing.id))

            request = OrganizationDeletionRequest(
                id=uuid4(),
                organization_id=org.id,
                organization_name=org.name,
                requested_by=actor.user_id,
                requested_at=now,
                confirmation_token=InvitationToken.generate().value,
                token_expires_at=now + DELETION_TOKEN_TTL,
            )
            await uow.deletion_requests.create(request)
            await uow.organizations.set_deletion_request(org.id, request.id)

        logger.info(
            "organization_deletion_requested",
            organization_id=str(organization_id),
            request_id=str(request.id),
            user_id=actor.user_id,
        )
        await self._send_confirmation(actor, request)
        return DeletionInitiated(request_id=request.id, organization_id=organization_id)

    async def _send_confirmation(self, actor: Identity, request: OrganizationDeletionRequest) -> None:
        if self._email_sender is None:
            return
        try:
            await self._email_sender.send_template(
                to=actor.email or "",
                template_alias=DELETION_CONFIRM_TEMPLATE,
                template_data={
                    "organizationName": request.organization_name,
                    "requestedBy": actor.name or actor.email,
                    "confirmationLink": (
                        f"{self._app_url}/delete-organization/confirm"
                        f"?token={request.confirmation_token}&requestId={request.id}"
                    ),
                    "expiresAt": format_email_date(request.token_expires_at),
                },
                metadata={
                    "organizationId": str(request.organization_id),
                    "userId": actor.user_id,
                },
            )
        except Exception:
            logger.exception("deletion_email_failed", request_id=str(request.id))
