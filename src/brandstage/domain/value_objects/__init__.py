"""Domain value objects."""

from brandstage.domain.value_objects.deletion_status import DeletionStatus
from brandstage.domain.value_objects.email_address import normalize_email
from brandstage.domain.value_objects.invitation_status import InvitationStatus
from brandstage.domain.value_objects.invitation_token import InvitationToken
from brandstage.domain.value_objects.organization_role import OrganizationRole
from brandstage.domain.value_objects.organization_type import OrganizationType

__all__ = [
    "DeletionStatus",
    "InvitationStatus",
    "InvitationToken",
    "OrganizationRole",
    "OrganizationType",
    "normalize_email",
]
