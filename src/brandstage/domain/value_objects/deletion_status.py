"""Organization deletion request states."""

from enum import StrEnum


class DeletionStatus(StrEnum):
    """Deletion request lifecycle."""

    PENDING_EMAIL = "pending-email"
    CONFIRMED_DELETION = "confirmed-deletion"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def in_flight(self) -> bool:
        return self in (DeletionStatus.PENDING_EMAIL, DeletionStatus.CONFIRMED_DELETION)
