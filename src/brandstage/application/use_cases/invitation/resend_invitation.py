"""Resend invitation use case."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import structlog

from brandstage.application.ports import EmailSender, Identity
from brandstage.application.use_cases.invitation.create_invitation import DEFAULT_INVITATION_TTL
from brandstage.application.use_cases.invitation.notifications import send_invitation_email
from brandstage.domain.entities import Invitation
from brandstage.domain.exceptions import AuthorizationError, NotFound, StateError
from brandstage.domain.permissions import has_permission
from brandstage.domain.permissions.catalog import USERS_INVITE
from brandstage.domain.value_objects import InvitationStatus

logger = structlog.get_logger()


class ResendInvitationUseCase:
    """Reset a pending invitation's expiry and email it again. The token is kept."""

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

    async def execute(self, actor: Identity, invitation_id: UUID) -> Invitation:
        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_id(invitation_id, for_update=True)
            if not invitation:
                raise NotFound("Invitation", invitation_id)

            member = await uow.members.get_for_user(invitation.organization_id, actor.user_id)
            if not member or not has_permission(member, USERS_INVITE):
                raise AuthorizationError("You do not have permission to manage invitations")

            if invitation.status != InvitationStatus.PENDING:
                raise StateError("Only pending invitations can be resent")

            invitation.expires_at = datetime.now(UTC) + self._ttl
            await uow.invitations.update(invitation)

        logger.info("invitation_resent", invitation_id=str(invitation_id), user_id=actor.user_id)
        await send_invitation_email(self._email_sender, invitation, self._app_url)
        return invitation
