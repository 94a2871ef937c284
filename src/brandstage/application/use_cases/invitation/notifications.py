"""Invitation email - best-effort delivery shared by create and resend."""

import structlog

from brandstage.application.ports import EmailSender
from brandstage.domain.entities import Invitation
from brandstage.domain.permissions.catalog import role_display_name

logger = structlog.get_logger()

INVITATION_TEMPLATE = "organization-invitation"


def invitation_url(app_url: str, token: str) -> str:
    return f"{app_url.rstrip('/')}/join?token={token}"


async def send_invitation_email(
    email_sender: EmailSender | None, invitation: Invitation, app_url: str
) -> bool:
    """Send the invitation email. Returns False instead of raising on failure."""
    if email_sender is None:
        return False
    expires = invitation.expires_at
    try:
        await email_sender.send_template(
            to=invitation.email,
            template_alias=INVITATION_TEMPLATE,
            template_data={
                "organizationName": invitation.organization_name,
                "inviterName": invitation.inviter_name or invitation.inviter_email or "",
                "inviteLink": invitation_url(app_url, invitation.token),
                "role": role_display_name(invitation.role),
                "expiresAt": f"{expires.day} {expires:%B %Y}",
            },
            metadata={
                "organizationId": str(invitation.organization_id),
                "userId": invitation.invited_by,
            },
        )
    except Exception:
        logger.exception("invitation_email_failed", invitation_id=str(invitation.id))
        return False
    return True
