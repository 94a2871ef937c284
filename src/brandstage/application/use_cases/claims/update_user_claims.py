"""Update user claims use case - mirror memberships into token claims."""

from dataclasses import dataclass
from typing import Any

import structlog

from brandstage.application.ports import ClaimsPublisher
from brandstage.domain.claims import MAX_CLAIMS_BYTES, WARN_CLAIMS_BYTES, build_user_claims

logger = structlog.get_logger()


@dataclass
class ClaimsUpdateResult:
    """Published payload, its size and whether the profile version was bumped."""

    payload: dict[str, Any]
    size: int
    profile_version_bumped: bool


class UpdateUserClaimsUseCase:
    """Rebuild and publish a user's claims, then bump their profile claims_version."""

    def __init__(
        self,
        unit_of_work_factory: type,
        claims_publisher: ClaimsPublisher,
        max_bytes: int = MAX_CLAIMS_BYTES,
        warn_bytes: int = WARN_CLAIMS_BYTES,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._publisher = claims_publisher
        self._max_bytes = max_bytes
        self._warn_bytes = warn_bytes

    async def execute(self, user_id: str) -> ClaimsUpdateResult:
        """Store and publisher errors propagate; the version bump is best-effort."""
        async with self._uow_factory() as uow:
            memberships = await uow.members.list_for_user(user_id)

        current_version = await self._current_version(user_id)
        build = build_user_claims(
            memberships,
            current_version,
            max_bytes=self._max_bytes,
            warn_bytes=self._warn_bytes,
        )
        await self._publisher.set_claims(user_id, build.payload)
        logger.info(
            "claims_updated",
            user_id=user_id,
            org_count=len(build.payload["orgs"]),
            size=build.size,
            cv=build.payload["cv"],
            fell_back=build.fell_back,
        )

        try:
            async with self._uow_factory() as uow:
                bumped = await uow.users.increment_claims_version(user_id)
        except Exception:
            logger.exception("claims_version_bump_failed", user_id=user_id)
            bumped = False
        else:
            if not bumped:
                logger.warning("claims_version_bump_skipped", user_id=user_id, reason="no_profile")

        return ClaimsUpdateResult(payload=build.payload, size=build.size, profile_version_bumped=bumped)

    async def _current_version(self, user_id: str) -> int:
        """cv from the existing claims; 0 when the user or claims are missing."""
        try:
            existing = await self._publisher.get_claims(user_id)
        except Exception:
            logger.warning("claims_read_failed", user_id=user_id)
            return 0
        if not existing:
            return 0
        cv = existing.get("cv", 0)
        return cv if isinstance(cv, int) and not isinstance(cv, bool) else 0


async def sync_claims(updater: UpdateUserClaimsUseCase | None, user_id: str) -> None:
    """Resync claims after a committed membership change. Failures are logged."""
    if updater is None:
        return
    try:
        await updater.execute(user_id)
    except Exception:
        logger.exception("claims_sync_failed", user_id=user_id)
