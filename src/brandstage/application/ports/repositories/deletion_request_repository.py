"""Organization deletion request repository port."""

from typing import Protocol
from uuid import UUID

from brandstage.domain.entities import OrganizationDeletionRequest


class DeletionRequestRepository(Protocol):
    """Port for deletion request persistence."""

    async def get_by_id(
        self, request_id: UUID, for_update: bool = False
    ) -> OrganizationDeletionRequest | None: ...

    async def create(self, request: OrganizationDeletionRequest) -> OrganizationDeletionRequest: ...

    async def update(self, request: OrganizationDeletionRequest) -> None:
        """Persist status, confirmation and undo fields."""
        ...
