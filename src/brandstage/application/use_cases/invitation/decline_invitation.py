"""Decline invitation use case."""

from uuid import UUID

import structlog

from brandstage.application.ports import Identity
from brandstage.domain.entities import Invitation
from brandstage.domain.exceptions import AuthorizationError, NotFound, StateError
from brandstage.domain.value_objects import InvitationStatus, normalize_email

logger = structlog.get_logger()


class DeclineInvitationUseCase:
    """Invitee refuses an invitation addressed to their email."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Identity, invitation_id: UUID) -> Invitation:
        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_id(invitation_id, for_update=True)
            if not invitation:
                raise NotFound("Invitation", invitation_id)

            if normalize_email(actor.email or "") != invitation.email:
                raise AuthorizationError("This invitation was sent to a different email address")
            if invitation.status != InvitationStatus.PENDING:
                raise StateError("Only pending invitations can be declined")

            invitation.status = InvitationStatus.DECLINED
            await uow.invitations.update(invitation)

        logger.info("invitation_declined", invitation_id=str(invitation_id), user_id=actor.user_id)
        return invitation
