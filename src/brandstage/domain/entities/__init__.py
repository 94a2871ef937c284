"""Domain entities."""

from brandstage.domain.entities.deletion_request import OrganizationDeletionRequest
from brandstage.domain.entities.invitation import Invitation
from brandstage.domain.entities.organization import Organization
from brandstage.domain.entities.organization_member import OrganizationMember
from brandstage.domain.entities.user_profile import UserProfile

__all__ = [
    "Invitation",
    "Organization",
    "OrganizationDeletionRequest",
    "OrganizationMember",
    "UserProfile",
]
