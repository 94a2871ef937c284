"""Organization entity - the paying tenant."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from brandstage.domain.value_objects import OrganizationType


@dataclass
class Organization:
    """Organization - owns brands, has members."""

    id: UUID
    name: str
    type: OrganizationType
    billing_email: str
    created_by: str
    created_at: datetime
    deletion_request_id: UUID | None = None
    soft_deleted_at: datetime | None = None
