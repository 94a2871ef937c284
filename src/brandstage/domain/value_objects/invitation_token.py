"""Invitation token - unguessable link secret."""

import secrets
from dataclasses import dataclass

TOKEN_BYTES = 32


@dataclass(frozen=True)
class InvitationToken:
    """URL-safe token with at least 128 bits of entropy."""

    value: str

    def __post_init__(self) -> None:
        # token_urlsafe encodes ~1.3 chars per byte; 22 chars is 128 bits
        if len(self.value) < 22:
            raise ValueError("Invitation token must carry at least 128 bits")

    @classmethod
    def generate(cls) -> "InvitationToken":
        return cls(secrets.token_urlsafe(TOKEN_BYTES))

    def __str__(self) -> str:
        return self.value
