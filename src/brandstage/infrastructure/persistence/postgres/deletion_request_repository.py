"""PostgreSQL organization deletion request repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from brandstage.domain.entities import OrganizationDeletionRequest
from brandstage.domain.value_objects import DeletionStatus

_COLUMNS = (
    "id, organization_id, organization_name, requested_by, requested_at, "
    "confirmation_token, token_expires_at, status, confirmed_at, "
    "scheduled_deletion_at, undo_token, undo_expires_at"
)


def _to_request(r: tuple) -> OrganizationDeletionRequest:
    return OrganizationDeletionRequest(
        id=r[0],
        organization_id=r[1],
        organization_name=r[2],
        requested_by=r[3],
        requested_at=r[4],
        confirmation_token=r[5],
        token_expires_at=r[6],
        status=DeletionStatus(r[7]),
        confirmed_at=r[8],
        scheduled_deletion_at=r[9],
        undo_token=r[10],
        undo_expires_at=r[11],
    )


class PostgresDeletionRequestRepository:
    """Deletion request repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(
        self, request_id: UUID, for_update: bool = False
    ) -> OrganizationDeletionRequest | None:
        """Get deletion request by id. for_update locks the row until the transaction ends."""
        q = f"SELECT {_COLUMNS} FROM organization_deletion_request WHERE id = %s"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, (request_id,))
        r = await cur.fetchone()
        return _to_request(r) if r else None

    async def create(self, request: OrganizationDeletionRequest) -> OrganizationDeletionRequest:
        """Create deletion request."""
        await self._conn.execute(
            f"INSERT INTO organization_deletion_request ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                request.id,
                request.organization_id,
                request.organization_name,
                request.requested_by,
                request.requested_at,
                request.confirmation_token,
                request.token_expires_at,
                str(request.status),
                request.confirmed_at,
                request.scheduled_deletion_at,
                request.undo_token,
                request.undo_expires_at,
            ),
        )
        return request

    async def update(self, request: OrganizationDeletionRequest) -> None:
        """Update status, confirmation and undo fields."""
        await self._conn.execute(
            "UPDATE organization_deletion_request SET status = %s, confirmed_at = %s, "
            "scheduled_deletion_at = %s, undo_token = %s, undo_expires_at = %s WHERE id = %s",
            (
                str(request.status),
                request.confirmed_at,
                request.scheduled_deletion_at,
                request.undo_token,
                request.undo_expires_at,
                request.id,
            ),
        )
