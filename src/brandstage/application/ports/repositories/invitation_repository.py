"""Invitation repository port."""

from typing import Protocol
from uuid import UUID

from brandstage.domain.entities import Invitation


class InvitationRepository(Protocol):
    """Port for invitation persistence."""

    async def get_by_id(self, invitation_id: UUID, for_update: bool = False) -> Invitation | None: ...

    async def get_by_token(self, token: str, for_update: bool = False) -> Invitation | None: ...

    async def find_pending(self, organization_id: UUID, email: str) -> Invitation | None: ...

    async def list_pending_for_email(self, email: str) -> list[Invitation]: ...

    async def create(self, invitation: Invitation) -> Invitation: ...

    async def update(self, invitation: Invitation) -> None: ...
