"""Create invitation use case."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import structlog

from brandstage.application.dto import CreateInvitationInput
from brandstage.application.ports import EmailSender, Identity
from brandstage.application.use_cases.invitation.notifications import send_invitation_email
from brandstage.domain.entities import Invitation
from brandstage.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFound,
    ValidationError,
)
from brandstage.domain.permissions import can_invite_role, has_permission
from brandstage.domain.permissions.catalog import USERS_INVITE
from brandstage.domain.value_objects import (
    InvitationStatus,
    InvitationToken,
    OrganizationRole,
    normalize_email,
)

logger = structlog.get_logger()

DEFAULT_INVITATION_TTL = timedelta(days=7)


class CreateInvitationUseCase:
    """Invite an email address into an organization with a role and brand scope."""

    def __init__(
        self,
        unit_of_work_factory: type,
        email_sender: EmailSender | None = None,
        app_url: str = "",
        ttl: timedelta = DEFAULT_INVITATION_TTL,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._email_sender = email_sender
        self._app_url = app_url
        self._ttl = ttl

    async def execute(self, actor: Identity, data: CreateInvitationInput) -> Invitation:
        """Create a pending invitation. Email delivery failure does not undo it."""
        email = normalize_email(data.email or "")
        if "@" not in email:
            raise ValidationError("A valid email address is required")
        try:
            role = OrganizationRole(data.role)
        except ValueError as e:
            raise ValidationError("Invalid role. Must be owner, admin, or member") from e

        async with self._uow_factory() as uow:
            org = await uow.organizations.get_by_id(data.organization_id)
            if not org:
                raise NotFound("Organization", data.organization_id)

            member = await uow.members.get_for_user(org.id, actor.user_id)
            if not member:
                raise AuthorizationError("You are not a member of this organization")
            if not has_permission(member, USERS_INVITE):
                raise AuthorizationError("You do not have permission to invite users")
            if not can_invite_role(member, role):
                raise AuthorizationError(f"You do not have permission to invite users as {role}")

            existing = await uow.invitations.find_pending(org.id, email)
            if existing:
                raise ConflictError(
                    "A pending invitation already exists for this email",
                    existing_id=existing.id,
                )

            members = await uow.members.list_for_organization(org.id)
            profiles = await uow.users.get_many([m.user_id for m in members])
            if any(normalize_email(p.email or "") == email for p in profiles):
                raise ConflictError("A user with this email is already a member of this organization")

            inviter = await uow.users.get_by_id(actor.user_id)
            now = datetime.now(UTC)
            invitation = Invitation(
                id=uuid4(),
                email=email,
                organization_id=org.id,
                organization_name=org.name,
                role=role,
                token=InvitationToken.generate().value,
                status=InvitationStatus.PENDING,
                invited_by=actor.user_id,
                invited_at=now,
                expires_at=now + self._ttl,
                brand_access=list(data.brand_access or []),
                auto_grant_new_brands=bool(data.auto_grant_new_brands),
                inviter_name=(inviter.display_name if inviter else None) or actor.name,
                inviter_email=(inviter.email if inviter else None) or actor.email,
            )
            await uow.invitations.create(invitation)

        logger.info(
            "invitation_created",
            invitation_id=str(invitation.id),
            organization_id=str(org.id),
            role=str(role),
            invited_by=actor.user_id,
        )
        await send_invitation_email(self._email_sender, invitation, self._app_url)
        return invitation
