"""Fixtures for API tests."""

import falcon.asgi
import pytest

from brandstage.application.ports import Identity
from brandstage.application.use_cases.claims.update_user_claims import UpdateUserClaimsUseCase
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
from brandstage.application.use_cases.member.update_member import UpdateMemberUseCase
from brandstage.application.use_cases.organization.confirm_deletion import (
    ConfirmOrganizationDeletionUseCase,
)
from brandstage.application.use_cases.organization.create_organization import (
    CreateOrganizationUseCase,
)
from brandstage.application.use_cases.organization.initiate_deletion import (
    InitiateOrganizationDeletionUseCase,
)
from brandstage.application.use_cases.organization.undo_deletion import (
    UndoOrganizationDeletionUseCase,
)
from brandstage.infrastructure.permission.permission_checker import (
    OrganizationPermissionChecker,
)
from brandstage.interfaces.api.errors import register_error_handlers
from brandstage.main import add_routes

TEST_USERS = {
    "owner-1": Identity(user_id="owner-1", email="owner@example.com", name="Olive Owner"),
    "admin-1": Identity(user_id="admin-1", email="admin@example.com", name="Adam Admin"),
    "member-1": Identity(user_id="member-1", email="member@example.com", name="Mia Member"),
    "invitee-1": Identity(user_id="invitee-1", email="invitee@example.com", name="Ivy Invitee"),
}


class AuthBypassMiddleware:
    """Middleware that sets context.user from the X-Test-User header for testing."""

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User")
        req.context.user = TEST_USERS.get(user_id) if user_id else None


def as_user(user_id: str) -> dict[str, str]:
    return {"X-Test-User": user_id}


@pytest.fixture
def app(uow_factory, claims_publisher, email_sender):
    """Falcon ASGI app with every API route wired to in-memory fakes."""
    claims_updater = UpdateUserClaimsUseCase(uow_factory, claims_publisher)
    app = falcon.asgi.App(middleware=[AuthBypassMiddleware()])
    register_error_handlers(app)
    add_routes(
        app,
        uow_factory=uow_factory,
        permission_checker=OrganizationPermissionChecker(uow_factory),
        create_organization=CreateOrganizationUseCase(uow_factory, claims_updater),
        initiate_deletion=InitiateOrganizationDeletionUseCase(
            uow_factory, email_sender, app_url="https://app.test"
        ),
        confirm_deletion=ConfirmOrganizationDeletionUseCase(
            uow_factory, email_sender, app_url="https://app.test"
        ),
        undo_deletion=UndoOrganizationDeletionUseCase(uow_factory),
        create_invitation=CreateInvitationUseCase(
            uow_factory, email_sender, app_url="https://app.test"
        ),
        accept_invitation=AcceptInvitationUseCase(uow_factory, claims_updater),
        decline_invitation=DeclineInvitationUseCase(uow_factory),
        cancel_invitation=CancelInvitationUseCase(uow_factory),
        resend_invitation=ResendInvitationUseCase(
            uow_factory, email_sender, app_url="https://app.test"
        ),
        get_invitation_preview=GetInvitationPreviewUseCase(uow_factory),
        list_pending_invitations=ListPendingInvitationsUseCase(uow_factory),
        update_member=UpdateMemberUseCase(uow_factory, claims_updater),
    )
    return app


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
