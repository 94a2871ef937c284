"""Permission checker implementation - evaluates the stored membership."""

from uuid import UUID

from brandstage.domain.entities import OrganizationMember
from brandstage.domain.permissions import can_access_brand_resource, has_permission


class OrganizationPermissionChecker:
    """Loads the caller's membership and applies the authorization evaluator."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def get_member(self, user_id: str, organization_id: UUID) -> OrganizationMember | None:
        async with self._uow_factory() as uow:
            return await uow.members.get_for_user(organization_id, user_id)

    async def check(
        self,
        user_id: str,
        organization_id: UUID,
        permission: str,
        brand_id: str | None = None,
    ) -> bool:
        """Check permission, and brand access too when brand_id is given."""
        member = await self.get_member(user_id, organization_id)
        if not member:
            return False
        if brand_id is None:
            return has_permission(member, permission)
        return can_access_brand_resource(member, permission, brand_id)
