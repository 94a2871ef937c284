"""Identity provider port - verifies bearer tokens."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class Identity:
    """Verified caller identity."""

    user_id: str
    email: str | None = None
    name: str | None = None


class IdentityProvider(Protocol):
    """Port for token verification. Raises AuthenticationError on failure."""

    def verify_token(self, raw_token: str) -> Identity: ...
