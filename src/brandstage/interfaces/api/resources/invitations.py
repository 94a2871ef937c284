"""Invitation API resources."""

from uuid import UUID

import falcon.asgi

from brandstage.application.dto import CreateInvitationInput
from brandstage.application.use_cases.invitation.accept_invitation import AcceptInvitationUseCase
from brandstage.application.use_cases.invitation.cancel_invitation import CancelInvitationUseCase
from brandstage.application.use_cases.invitation.create_invitation import CreateInvitationUseCase
from brandstage.application.use_cases.invitation.decline_invitation import (
    DeclineInvitationUseCase,
)
from brandstage.application.use_cases.invitation.get_invitation_preview import (
    GetInvitationPreviewUseCase,
)
from brandstage.application.use_cases.invitation.list_pending_invitations import (
    ListPendingInvitationsUseCase,
)
from brandstage.application.use_cases.invitation.resend_invitation import ResendInvitationUseCase
from brandstage.domain.entities import Invitation
from brandstage.interfaces.api.middleware.auth import current_user
from brandstage.interfaces.api.schemas import (
    AcceptInvitationsRequest,
    CreateInvitationRequest,
    parse_body,
)


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def invitation_to_dict(invitation: Invitation) -> dict:
    """Invitation as returned to members and invitees. The token is never included."""
    return {
        "id": str(invitation.id),
        "email": invitation.email,
        "organization_id": str(invitation.organization_id),
        "organization_name": invitation.organization_name,
        "role": str(invitation.role),
        "status": str(invitation.status),
        "brand_access": list(invitation.brand_access),
        "auto_grant_new_brands": invitation.auto_grant_new_brands,
        "invited_by": invitation.invited_by,
        "inviter_name": invitation.inviter_name,
        "invited_at": _iso(invitation.invited_at),
        "expires_at": _iso(invitation.expires_at),
        "accepted_at": _iso(invitation.accepted_at),
    }


class OrganizationInvitationsResource:
    """POST /v1/organizations/{organization_id}/invitations - invite by email."""

    def __init__(self, create_invitation: CreateInvitationUseCase) -> None:
        self._create = create_invitation

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, organization_id: UUID
    ) -> None:
        user = current_user(req)
        body = await parse_body(req, CreateInvitationRequest)
        invitation = await self._create.execute(
            user,
            CreateInvitationInput(
                organization_id=organization_id,
                email=body.email,
                role=body.role,
                brand_access=body.brand_access,
                auto_grant_new_brands=body.auto_grant_new_brands,
            ),
        )
        resp.media = invitation_to_dict(invitation)
        resp.status = falcon.HTTP_201


class PendingInvitationsResource:
    """GET /v1/invitations/pending - invitations addressed to the caller."""

    def __init__(self, list_pending: ListPendingInvitationsUseCase) -> None:
        self._list_pending = list_pending

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        invitations = await self._list_pending.execute(user)
        resp.media = {"items": [invitation_to_dict(i) for i in invitations]}
        resp.status = falcon.HTTP_200


class InvitationPreviewResource:
    """GET /v1/invitations/token/{token} - public preview for the join page."""

    def __init__(self, get_preview: GetInvitationPreviewUseCase) -> None:
        self._get_preview = get_preview

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, token: str) -> None:
        preview = await self._get_preview.execute(token)
        resp.media = {
            "organization_name": preview.organization_name,
            "role": str(preview.role),
            "inviter_name": preview.inviter_name,
        }
        resp.status = falcon.HTTP_200


class AcceptInvitationsResource:
    """POST /v1/invitations/accept - accept several invitations at once."""

    def __init__(self, accept_invitation: AcceptInvitationUseCase) -> None:
        self._accept = accept_invitation

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await parse_body(req, AcceptInvitationsRequest)
        result = await self._accept.execute_many(user, body.invitation_ids)
        resp.media = {
            "accepted": [str(i) for i in result.accepted],
            "skipped": [str(i) for i in result.skipped],
            "errors": [str(i) for i in result.errors],
        }
        resp.status = falcon.HTTP_200


class InvitationActionsResource:
    """POST /v1/invitations/{invitation_id}/{accept,decline,cancel,resend}."""

    def __init__(
        self,
        accept_invitation: AcceptInvitationUseCase,
        decline_invitation: DeclineInvitationUseCase,
        cancel_invitation: CancelInvitationUseCase,
        resend_invitation: ResendInvitationUseCase,
    ) -> None:
        self._accept = accept_invitation
        self._decline = decline_invitation
        self._cancel = cancel_invitation
        self._resend = resend_invitation

    async def on_post_accept(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invitation_id: UUID
    ) -> None:
        result = await self._accept.execute(current_user(req), invitation_id)
        resp.media = {
            "invitation_id": str(result.invitation_id),
            "organization_id": str(result.organization_id),
            "member_id": str(result.member_id) if result.member_id else None,
            "already_member": result.already_member,
        }
        resp.status = falcon.HTTP_200

    async def on_post_decline(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invitation_id: UUID
    ) -> None:
        invitation = await self._decline.execute(current_user(req), invitation_id)
        resp.media = invitation_to_dict(invitation)
        resp.status = falcon.HTTP_200

    async def on_post_cancel(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invitation_id: UUID
    ) -> None:
        invitation = await self._cancel.execute(current_user(req), invitation_id)
        resp.media = invitation_to_dict(invitation)
        resp.status = falcon.HTTP_200

    async def on_post_resend(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invitation_id: UUID
    ) -> None:
        invitation = await self._resend.execute(current_user(req), invitation_id)
        resp.media = invitation_to_dict(invitation)
        resp.status = falcon.HTTP_200
