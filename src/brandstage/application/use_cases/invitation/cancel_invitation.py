"""Cancel invitation use case."""

from uuid import UUID

import structlog

from brandstage.application.ports import Identity
from brandstage.domain.entities import Invitation
from brandstage.domain.exceptions import AuthorizationError, NotFound, StateError
from brandstage.domain.permissions import has_permission
from brandstage.domain.permissions.catalog import USERS_INVITE
from brandstage.domain.value_objects import InvitationStatus

logger = structlog.get_logger()


class CancelInvitationUseCase:
    """Withdraw a pending invitation. Actor needs users:invite in its organization."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Identity, invitation_id: UUID) -> Invitation:
        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_id(invitation_id, for_update=True)
            if not invitation:
                raise NotFound("Invitation", invitation_id)

            member = await uow.members.get_for_user(invitation.organization_id, actor.user_id)
            if not member or not has_permission(member, USERS_INVITE):
                raise AuthorizationError("You do not have permission to manage invitations")

            if invitation.status != InvitationStatus.PENDING:
                raise StateError("Only pending invitations can be cancelled")

            invitation.status = InvitationStatus.CANCELLED
            await uow.invitations.update(invitation)

        logger.info("invitation_cancelled", invitation_id=str(invitation_id), user_id=actor.user_id)
        return invitation
