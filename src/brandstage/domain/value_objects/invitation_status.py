"""Invitation lifecycle states."""

from enum import StrEnum


class InvitationStatus(StrEnum):
    """Invitation status. Only PENDING is non-terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING
