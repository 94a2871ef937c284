"""PostgreSQL invitation repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation

from brandstage.domain.entities import Invitation
from brandstage.domain.exceptions import ConflictError
from brandstage.domain.value_objects import InvitationStatus, OrganizationRole

_COLUMNS = (
    "id, email, organization_id, organization_name, role, token, status, invited_by, "
    "invited_at, expires_at, brand_access, auto_grant_new_brands, accepted_at, "
    "inviter_name, inviter_email"
)


def _to_invitation(r: tuple) -> Invitation:
    return Invitation(
        id=r[0],
        email=r[1],
        organization_id=r[2],
        organization_name=r[3],
        role=OrganizationRole(r[4]),
        token=r[5],
        status=InvitationStatus(r[6]),
        invited_by=r[7],
        invited_at=r[8],
        expires_at=r[9],
        brand_access=list(r[10] or []),
        auto_grant_new_brands=r[11],
        accepted_at=r[12],
        inviter_name=r[13],
        inviter_email=r[14],
    )


class PostgresInvitationRepository:
    """Invitation repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _fetch_one(self, where: str, params: tuple, for_update: bool) -> Invitation | None:
        q = f"SELECT {_COLUMNS} FROM invitation WHERE {where}"
        if for_update:
            q += " FOR UPDATE"
        cur = await self._conn.execute(q, params)
        r = await cur.fetchone()
        return _to_invitation(r) if r else None

    async def get_by_id(self, invitation_id: UUID, for_update: bool = False) -> Invitation | None:
        """Get invitation by id. for_update locks the row until the transaction ends."""
        return await self._fetch_one("id = %s", (invitation_id,), for_update)

    async def get_by_token(self, token: str, for_update: bool = False) -> Invitation | None:
        """Get invitation by its link token."""
        return await self._fetch_one("token = %s", (token,), for_update)

    async def find_pending(self, organization_id: UUID, email: str) -> Invitation | None:
        """The pending invitation for (organization, email), if any."""
        return await self._fetch_one(
            "organization_id = %s AND email = %s AND status = %s LIMIT 1",
            (organization_id, email, str(InvitationStatus.PENDING)),
            False,
        )

    async def list_pending_for_email(self, email: str) -> list[Invitation]:
        """List pending invitations addressed to email."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM invitation WHERE email = %s AND status = %s ORDER BY invited_at",
            (email, str(InvitationStatus.PENDING)),
        )
        return [_to_invitation(r) for r in await cur.fetchall()]

    async def create(self, invitation: Invitation) -> Invitation:
        """Create invitation. The partial unique index rejects a second pending one.

        The insert runs in a savepoint so the losing side of a race can still look up
        the winner and report its id.
        """
        try:
            async with self._conn.transaction():
                await self._conn.execute(
                    f"INSERT INTO invitation ({_COLUMNS}) "
                    "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                    (
                        invitation.id,
                        invitation.email,
                        invitation.organization_id,
                        invitation.organization_name,
                        str(invitation.role),
                        invitation.token,
                        str(invitation.status),
                        invitation.invited_by,
                        invitation.invited_at,
                        invitation.expires_at,
                        list(invitation.brand_access),
                        invitation.auto_grant_new_brands,
                        invitation.accepted_at,
                        invitation.inviter_name,
                        invitation.inviter_email,
                    ),
                )
        except UniqueViolation as e:
            existing = await self.find_pending(invitation.organization_id, invitation.email)
            raise ConflictError(
                "A pending invitation already exists for this email",
                existing_id=existing.id if existing else None,
            ) from e
        return invitation

    async def update(self, invitation: Invitation) -> None:
        """Update status, expiry and acceptance time. Token and addressee never change."""
        await self._conn.execute(
            "UPDATE invitation SET status = %s, expires_at = %s, accepted_at = %s WHERE id = %s",
            (
                str(invitation.status),
                invitation.expires_at,
                invitation.accepted_at,
                invitation.id,
            ),
        )
