"""Permission checker port - organization RBAC."""

from typing import Protocol
from uuid import UUID

from brandstage.domain.entities import OrganizationMember


class PermissionChecker(Protocol):
    """Port for checking a user's permissions inside an organization."""

    async def get_member(self, user_id: str, organization_id: UUID) -> OrganizationMember | None: ...

    async def check(
        self,
        user_id: str,
        organization_id: UUID,
        permission: str,
        brand_id: str | None = None,
    ) -> bool: ...
