"""Invitation DTOs."""

from dataclasses import dataclass, field
from uuid import UUID

from brandstage.domain.value_objects import OrganizationRole


@dataclass
class CreateInvitationInput:
    """Input for inviting an email address into an organization."""

    organization_id: UUID
    email: str
    role: OrganizationRole
    brand_access: list[str] = field(default_factory=list)
    auto_grant_new_brands: bool = False


@dataclass
class InvitationPreview:
    """Public view of an invitation, safe to show to an unauthenticated holder of the link."""

    organization_name: str
    role: OrganizationRole
    inviter_name: str | None


@dataclass
class AcceptedInvitation:
    """Output of an accepted invitation."""

    invitation_id: UUID
    organization_id: UUID
    member_id: UUID | None
    already_member: bool = False
