"""Confirm organization deletion use case - the emailed confirmation link."""

import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

import structlog

from brandstage.application.dto import DeletionConfirmed
from brandstage.application.ports import EmailSender
from brandstage.application.use_cases.organization.initiate_deletion import format_email_date
from brandstage.domain.entities import OrganizationDeletionRequest
from brandstage.domain.exceptions import NotFound, StateError, ValidationError
from brandstage.domain.permissions import has_permission
from brandstage.domain.permissions.catalog import ORG_DELETE
from brandstage.domain.value_objects import DeletionStatus, InvitationToken

logger = structlog.get_logger()

DELETION_GRACE_PERIOD = timedelta(days=28)
DELETION_UNDO_WINDOW = timedelta(hours=24)
DELETION_ALERT_TEMPLATE = "organization-deletion-alert"


class ConfirmOrganizationDeletionUseCase:
    """Soft-delete the organization once the requester follows the emailed link."""

    def __init__(
        self,
        unit_of_work_factory: type,
        email_sender: EmailSender | None = None,
        app_url: str = "",
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._email_sender = email_sender
        self._app_url = app_url.rstrip("/")

    async def execute(self, request_id: UUID, token: str) -> DeletionConfirmed:
        """A link past its expiry cancels the request; that is committed before StateError is raised."""
        if not token:
            raise ValidationError("token is required")

        now = datetime.now(UTC)
        expired = False
        async with self._uow_factory() as uow:
            request = await uow.deletion_requests.get_by_id(request_id, for_update=True)
            if not request:
                raise NotFound("Deletion request", request_id)
            if not secrets.compare_digest(request.confirmation_token.encode(), token.encode()):
                raise ValidationError("Invalid confirmation token")
            if request.status != DeletionStatus.PENDING_EMAIL:
                raise StateError(f"Deletion request is {request.status}")

            if request.is_token_expired(now):
                request.status = DeletionStatus.CANCELLED
                await uow.deletion_requests.update(request)
                await uow.organizations.set_deletion_request(request.organization_id, None)
                expired = True
            else:
                request.status = DeletionStatus.CONFIRMED_DELETION
                request.confirmed_at = now
                request.scheduled_deletion_at = now + DELETION_GRACE_PERIOD
                request.undo_token = InvitationToken.generate().value
                request.undo_expires_at = now + DELETION_UNDO_WINDOW
                await uow.deletion_requests.update(request)
                await uow.organizations.set_soft_deleted(request.organization_id, now)
                emails, confirmed_by = await self._alert_recipients(uow, request)

        if expired:
            logger.info("deletion_confirmation_expired", request_id=str(request_id))
            raise StateError("Confirmation link has expired")

        logger.info(
            "organization_deletion_confirmed",
            organization_id=str(request.organization_id),
            request_id=str(request.id),
            scheduled_deletion_at=request.scheduled_deletion_at.isoformat(),
        )
        await self._send_alerts(request, emails, confirmed_by)
        return DeletionConfirmed(
            request_id=request.id,
            organization_id=request.organization_id,
            scheduled_deletion_at=request.scheduled_deletion_at,
            undo_expires_at=request.undo_expires_at,
        )

    @staticmethod
    async def _alert_recipients(uow, request: OrganizationDeletionRequest) -> tuple[list[str], str]:
        """Emails of everyone else who could undo the deletion, and the requester's display name."""
        members = await uow.members.list_for_organization(request.organization_id)
        user_ids = {
            m.user_id
            for m in members
            if m.user_id != request.requested_by and has_permission(m, ORG_DELETE)
        }
        profiles = await uow.users.get_many([*sorted(user_ids), request.requested_by])
        emails = [p.email for p in profiles if p.id in user_ids and p.email]
        requester = next((p for p in profiles if p.id == request.requested_by), None)
        confirmed_by = requester.display_name if requester and requester.display_name else ""
        return emails, confirmed_by or "A team member"

    async def _send_alerts(
        self, request: OrganizationDeletionRequest, emails: list[str], confirmed_by: str
    ) -> None:
        if self._email_sender is None:
            return
        undo_link = (
            f"{self._app_url}/delete-organization/undo"
            f"?token={request.undo_token}&requestId={request.id}"
        )
        for email in emails:
            try:
                await self._email_sender.send_template(
                    to=email,
                    template_alias=DELETION_ALERT_TEMPLATE,
                    template_data={
                        "organizationName": request.organization_name,
                        "confirmedBy": confirmed_by,
                        "scheduledDate": format_email_date(request.scheduled_deletion_at),
                        "undoLink": undo_link,
                        "undoExpiresAt": format_email_date(request.undo_expires_at),
                    },
                    metadata={"organizationId": str(request.organization_id)},
                )
            except Exception:
                logger.exception("deletion_alert_failed", request_id=str(request.id))
