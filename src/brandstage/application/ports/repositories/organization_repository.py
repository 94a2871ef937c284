"""Organization repository port."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from brandstage.domain.entities import Organization


class OrganizationRepository(Protocol):
    """Port for organization persistence."""

    async def get_by_id(self, organization_id: UUID) -> Organization | None: ...

    async def create(self, organization: Organization) -> Organization: ...

    async def set_deletion_request(
        self, organization_id: UUID, deletion_request_id: UUID | None
    ) -> None: ...

    async def set_soft_deleted(
        self, organization_id: UUID, soft_deleted_at: datetime | None
    ) -> None:
        """Hide the organization from lookups, or restore it with None."""
        ...
