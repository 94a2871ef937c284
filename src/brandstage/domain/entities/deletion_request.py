"""Organization deletion request entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from brandstage.domain.value_objects import DeletionStatus


@dataclass
class OrganizationDeletionRequest:
    """Deletion request: email confirmation, then an undo window before the grace period runs out."""

    id: UUID
    organization_id: UUID
    organization_name: str
    requested_by: str
    requested_at: datetime
    confirmation_token: str
    token_expires_at: datetime
    status: DeletionStatus = DeletionStatus.PENDING_EMAIL
    confirmed_at: datetime | None = None
    scheduled_deletion_at: datetime | None = None
    undo_token: str | None = None
    undo_expires_at: datetime | None = None

    def is_token_expired(self, now: datetime) -> bool:
        return now > self.token_expires_at

    def is_undo_expired(self, now: datetime) -> bool:
        return self.undo_expires_at is None or now > self.undo_expires_at

    def blocks_new_request(self, now: datetime) -> bool:
        """A pending-email request stops blocking once its confirmation link has expired."""
        if self.status == DeletionStatus.PENDING_EMAIL:
            return not self.is_token_expired(now)
        return DeletionStatus(self.status).in_flight
