"""PostgreSQL organization repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from brandstage.domain.entities import Organization
from brandstage.domain.value_objects import OrganizationType

_COLUMNS = (
    "id, name, type, billing_email, created_by, created_at, deletion_request_id, soft_deleted_at"
)


def _to_organization(r: tuple) -> Organization:
    return Organization(
        id=r[0],
        name=r[1],
        type=OrganizationType(r[2]),
        billing_email=r[3],
        created_by=r[4],
        created_at=r[5],
        deletion_request_id=r[6],
        soft_deleted_at=r[7],
    )


class PostgresOrganizationRepository:
    """Organization repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, organization_id: UUID) -> Organization | None:
        """Get organization by id, ignoring soft-deleted ones."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM organization WHERE id = %s AND soft_deleted_at IS NULL",
            (organization_id,),
        )
        r = await cur.fetchone()
        return _to_organization(r) if r else None

    async def create(self, organization: Organization) -> Organization:
        """Create organization."""
        await self._conn.execute(
            f"INSERT INTO organization ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                organization.id,
                organization.name,
                str(organization.type),
                organization.billing_email,
                organization.created_by,
                organization.created_at,
                organization.deletion_request_id,
                organization.soft_deleted_at,
            ),
        )
        return organization

    async def set_deletion_request(
        self, organization_id: UUID, deletion_request_id: UUID | None
    ) -> None:
        """Point the organization at its active deletion request, or clear it."""
        await self._conn.execute(
            "UPDATE organization SET deletion_request_id = %s WHERE id = %s",
            (deletion_request_id, organization_id),
        )

    async def set_soft_deleted(
        self, organization_id: UUID, soft_deleted_at: datetime | None
    ) -> None:
        """Soft-delete the organization, or restore it with None."""
        await self._conn.execute(
            "UPDATE organization SET soft_deleted_at = %s WHERE id = %s",
            (soft_deleted_at, organization_id),
        )
