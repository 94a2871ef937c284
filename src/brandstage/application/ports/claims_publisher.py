"""Claims publisher port - the identity provider's per-user claims sink."""

from typing import Any, Protocol


class ClaimsPublisher(Protocol):
    """Reads and overwrites a user's custom token claims."""

    async def get_claims(self, user_id: str) -> dict[str, Any] | None: ...

    async def set_claims(self, user_id: str, payload: dict[str, Any]) -> None: ...
