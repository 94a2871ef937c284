"""Application DTOs."""

from brandstage.application.dto.invitation_dto import (
    AcceptedInvitation,
    CreateInvitationInput,
    InvitationPreview,
)
from brandstage.application.dto.member_dto import UpdateMemberInput
from brandstage.application.dto.organization_dto import (
    CreateOrganizationInput,
    DeletionConfirmed,
    DeletionInitiated,
)

__all__ = [
    "AcceptedInvitation",
    "CreateInvitationInput",
    "CreateOrganizationInput",
    "DeletionConfirmed",
    "DeletionInitiated",
    "InvitationPreview",
    "UpdateMemberInput",
]
