"""User profile entity."""

from dataclasses import dataclass


@dataclass
class UserProfile:
    """Profile record; clients watch claims_version to force a token refresh."""

    id: str
    email: str
    display_name: str = ""
    claims_version: int = 0
