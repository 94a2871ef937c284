"""Get invitation preview use case - public lookup by token."""

from brandstage.application.dto import InvitationPreview
from brandstage.domain.exceptions import NotFound


class GetInvitationPreviewUseCase:
    """Show the holder of an invitation link what they are being invited to."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, token: str) -> InvitationPreview:
        """Only organization name, role and inviter display name leave this method."""
        if not token:
            raise NotFound("Invitation", "token")
        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_token(token)
        if not invitation:
            raise NotFound("Invitation", "token")
        return InvitationPreview(
            organization_name=invitation.organization_name,
            role=invitation.role,
            inviter_name=invitation.inviter_name,
        )
