"""PostgreSQL user profile repository implementation."""

from psycopg import AsyncConnection

from brandstage.domain.entities import UserProfile


class PostgresUserRepository:
    """User profile repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        """Get profile by user id."""
        cur = await self._conn.execute(
            "SELECT id, email, display_name, claims_version FROM user_profile WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return UserProfile(id=r[0], email=r[1], display_name=r[2] or "", claims_version=r[3])

    async def get_many(self, user_ids: list[str]) -> list[UserProfile]:
        """Get profiles for several users; missing ids are skipped."""
        if not user_ids:
            return []
        cur = await self._conn.execute(
            "SELECT id, email, display_name, claims_version FROM user_profile WHERE id = ANY(%s)",
            (list(user_ids),),
        )
        rows = await cur.fetchall()
        return [
            UserProfile(id=r[0], email=r[1], display_name=r[2] or "", claims_version=r[3])
            for r in rows
        ]

    async def upsert(self, profile: UserProfile) -> None:
        """Insert the profile, or refresh email and display name of an existing one."""
        await self._conn.execute(
            """
            INSERT INTO user_profile (id, email, display_name, claims_version)
            VALUES (%s, %s, %s, 0)
            ON CONFLICT (id) DO UPDATE SET
                email = EXCLUDED.email,
                display_name = CASE
                    WHEN EXCLUDED.display_name <> '' THEN EXCLUDED.display_name
                    ELSE user_profile.display_name
                END
            """,
            (profile.id, profile.email, profile.display_name or ""),
        )

    async def increment_claims_version(self, user_id: str) -> bool:
        """Atomically bump claims_version so clients refresh their token."""
        cur = await self._conn.execute(
            "UPDATE user_profile SET claims_version = claims_version + 1 WHERE id = %s",
            (user_id,),
        )
        return cur.rowcount > 0
