"""Invitation entity - pending offer to join an organization."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from brandstage.domain.value_objects import InvitationStatus, OrganizationRole


@dataclass
class Invitation:
    """Invitation addressed to a normalized email."""

    id: UUID
    email: str
    organization_id: UUID
    organization_name: str
    role: OrganizationRole
    token: str
    status: InvitationStatus
    invited_by: str
    invited_at: datetime
    expires_at: datetime
    brand_access: list[str] = field(default_factory=list)
    auto_grant_new_brands: bool = False
    accepted_at: datetime | None = None
    inviter_name: str | None = None
    inviter_email: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_actionable(self, now: datetime) -> bool:
        """Pending and not past expiry."""
        return self.status == InvitationStatus.PENDING and not self.is_expired(now)
