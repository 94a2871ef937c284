"""Repository ports."""

from brandstage.application.ports.repositories.deletion_request_repository import (
    DeletionRequestRepository,
)
from brandstage.application.ports.repositories.invitation_repository import (
    InvitationRepository,
)
from brandstage.application.ports.repositories.member_repository import MemberRepository
from brandstage.application.ports.repositories.organization_repository import (
    OrganizationRepository,
)
from brandstage.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "DeletionRequestRepository",
    "InvitationRepository",
    "MemberRepository",
    "OrganizationRepository",
    "UserRepository",
]
