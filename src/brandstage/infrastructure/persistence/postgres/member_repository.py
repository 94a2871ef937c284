"""PostgreSQL organization member repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from brandstage.domain.entities import OrganizationMember
from brandstage.domain.value_objects import OrganizationRole

_COLUMNS = (
    "id, organization_id, user_id, role, permissions, brand_access, "
    "auto_grant_new_brands, invited_at, invited_by, joined_at"
)


def _role(value: str) -> OrganizationRole | str:
    # Unknown roles are kept as plain strings; the evaluator grants them nothing
    try:
        return OrganizationRole(value)
    except ValueError:
        return value


def _to_member(r: tuple) -> OrganizationMember:
    return OrganizationMember(
        id=r[0],
        organization_id=r[1],
        user_id=r[2],
        role=_role(r[3]),
        permissions=list(r[4] or []),
        brand_access=list(r[5] or []),
        auto_grant_new_brands=r[6],
        invited_at=r[7],
        invited_by=r[8],
        joined_at=r[9],
    )


class PostgresMemberRepository:
    """Organization member repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, member_id: UUID) -> OrganizationMember | None:
        """Get member by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM organization_member WHERE id = %s",
            (member_id,),
        )
        r = await cur.fetchone()
        return _to_member(r) if r else None

    async def get_for_user(self, organization_id: UUID, user_id: str) -> OrganizationMember | None:
        """Get a user's membership in an organization."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM organization_member WHERE organization_id = %s AND user_id = %s",
            (organization_id, user_id),
        )
        r = await cur.fetchone()
        return _to_member(r) if r else None

    async def list_for_user(self, user_id: str) -> list[OrganizationMember]:
        """List all memberships of a user in live organizations."""
        cur = await self._conn.execute(
            "SELECT m.id, m.organization_id, m.user_id, m.role, m.permissions, m.brand_access, "
            "m.auto_grant_new_brands, m.invited_at, m.invited_by, m.joined_at "
            "FROM organization_member m JOIN organization o ON o.id = m.organization_id "
            "WHERE m.user_id = %s AND o.soft_deleted_at IS NULL ORDER BY m.organization_id",
            (user_id,),
        )
        return [_to_member(r) for r in await cur.fetchall()]

    async def list_for_organization(self, organization_id: UUID) -> list[OrganizationMember]:
        """List members of an organization."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM organization_member WHERE organization_id = %s ORDER BY joined_at",
            (organization_id,),
        )
        return [_to_member(r) for r in await cur.fetchall()]

    async def create(self, member: OrganizationMember) -> OrganizationMember:
        """Create membership."""
        await self._conn.execute(
            f"INSERT INTO organization_member ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                member.id,
                member.organization_id,
                member.user_id,
                str(member.role),
                list(member.permissions),
                list(member.brand_access),
                member.auto_grant_new_brands,
                member.invited_at,
                member.invited_by,
                member.joined_at,
            ),
        )
        return member

    async def update(self, member: OrganizationMember) -> None:
        """Update role, permissions and brand scope."""
        await self._conn.execute(
            "UPDATE organization_member SET role = %s, permissions = %s, brand_access = %s, "
            "auto_grant_new_brands = %s WHERE id = %s",
            (
                str(member.role),
                list(member.permissions),
                list(member.brand_access),
                member.auto_grant_new_brands,
                member.id,
            ),
        )
