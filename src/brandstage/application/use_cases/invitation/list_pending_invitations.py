"""List pending invitations use case."""

from brandstage.application.ports import Identity
from brandstage.domain.entities import Invitation
from brandstage.domain.exceptions import ValidationError
from brandstage.domain.value_objects import normalize_email


class ListPendingInvitationsUseCase:
    """Pending invitations addressed to the caller's email."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, actor: Identity) -> list[Invitation]:
        email = normalize_email(actor.email or "")
        if not email:
            raise ValidationError("User account has no email address")
        async with self._uow_factory() as uow:
            return await uow.invitations.list_pending_for_email(email)
