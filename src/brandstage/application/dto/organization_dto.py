"""Organization DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from brandstage.domain.value_objects import OrganizationType


@dataclass
class CreateOrganizationInput:
    """Input for creating an organization."""

    name: str
    type: OrganizationType
    billing_email: str


@dataclass
class DeletionInitiated:
    """Output of a deletion initiation."""

    request_id: UUID
    organization_id: UUID


@dataclass
class DeletionConfirmed:
    """Output of a confirmed deletion: when it becomes permanent and until when it can be undone."""

    request_id: UUID
    organization_id: UUID
    scheduled_deletion_at: datetime
    undo_expires_at: datetime
