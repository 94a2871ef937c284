"""Organization member repository port."""

from typing import Protocol
from uuid import UUID

from brandstage.domain.entities import OrganizationMember


class MemberRepository(Protocol):
    """Port for organization membership persistence."""

    async def get_by_id(self, member_id: UUID) -> OrganizationMember | None: ...

    async def get_for_user(
        self, organization_id: UUID, user_id: str
    ) -> OrganizationMember | None: ...

    async def list_for_user(self, user_id: str) -> list[OrganizationMember]: ...

    async def list_for_organization(self, organization_id: UUID) -> list[OrganizationMember]: ...

    async def create(self, member: OrganizationMember) -> OrganizationMember: ...

    async def update(self, member: OrganizationMember) -> None: ...
