"""Application entry point and composition root."""

from datetime import timedelta

import falcon.asgi
import structlog

from brandstage import __version__
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
from brandstage.config import Settings, get_settings
from brandstage.infrastructure.auth.keycloak_provider import (
    KeycloakClaimsPublisher,
    KeycloakProvider,
)
from brandstage.infrastructure.email.postmark_sender import PostmarkEmailSender
from brandstage.infrastructure.permission.permission_checker import (
    OrganizationPermissionChecker,
)
from brandstage.infrastructure.persistence.postgres.connection import create_pool
from brandstage.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from brandstage.interfaces.api.errors import register_error_handlers
from brandstage.interfaces.api.middleware.auth import AuthMiddleware
from brandstage.interfaces.api.middleware.cors import CORSMiddleware
from brandstage.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from brandstage.interfaces.api.resources.health import HealthResource
from brandstage.interfaces.api.resources.invitations import (
    AcceptInvitationsResource,
    InvitationActionsResource,
    InvitationPreviewResource,
    OrganizationInvitationsResource,
    PendingInvitationsResource,
)
from brandstage.interfaces.api.resources.members import (
    MemberResource,
    MembersResource,
    MyPermissionsResource,
)
from brandstage.interfaces.api.resources.organizations import (
    DeletionConfirmResource,
    DeletionUndoResource,
    OrganizationDeletionResource,
    OrganizationsResource,
)
from brandstage.logging_config import configure_logging

logger = structlog.get_logger()


def main() -> None:
    """CLI entry point - run the API server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.environment != "development")
    logger.info("starting", version=__version__, environment=settings.environment)
    uvicorn.run(create_brandstage_app(settings), host="0.0.0.0", port=8000)


def add_routes(
    app: falcon.asgi.App,
    *,
    uow_factory,
    permission_checker,
    create_organization: CreateOrganizationUseCase,
    initiate_deletion: InitiateOrganizationDeletionUseCase,
    confirm_deletion: ConfirmOrganizationDeletionUseCase,
    undo_deletion: UndoOrganizationDeletionUseCase,
    create_invitation: CreateInvitationUseCase,
    accept_invitation: AcceptInvitationUseCase,
    decline_invitation: DeclineInvitationUseCase,
    cancel_invitation: CancelInvitationUseCase,
    resend_invitation: ResendInvitationUseCase,
    get_invitation_preview: GetInvitationPreviewUseCase,
    list_pending_invitations: ListPendingInvitationsUseCase,
    update_member: UpdateMemberUseCase,
    health_resource: HealthResource | None = None,
) -> None:
    """Register every API route on app."""
    health_resource = health_resource or HealthResource()
    invitation_actions = InvitationActionsResource(
        accept_invitation, decline_invitation, cancel_invitation, resend_invitation
    )

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/organizations", OrganizationsResource(create_organization))
    app.add_route(
        "/v1/organizations/{organization_id:uuid}/deletion",
        OrganizationDeletionResource(initiate_deletion),
    )
    app.add_route(
        "/v1/organization-deletions/{request_id:uuid}/confirm",
        DeletionConfirmResource(confirm_deletion),
    )
    app.add_route(
        "/v1/organization-deletions/{request_id:uuid}/undo",
        DeletionUndoResource(undo_deletion),
    )
    app.add_route(
        "/v1/organizations/{organization_id:uuid}/invitations",
        OrganizationInvitationsResource(create_invitation),
    )
    app.add_route(
        "/v1/organizations/{organization_id:uuid}/members",
        MembersResource(uow_factory, permission_checker),
    )
    app.add_route(
        "/v1/organizations/{organization_id:uuid}/members/{member_id:uuid}",
        MemberResource(update_member),
    )
    app.add_route(
        "/v1/organizations/{organization_id:uuid}/permissions/me",
        MyPermissionsResource(permission_checker),
    )
    app.add_route("/v1/invitations/pending", PendingInvitationsResource(list_pending_invitations))
    app.add_route("/v1/invitations/accept", AcceptInvitationsResource(accept_invitation))
    app.add_route("/v1/invitations/token/{token}", InvitationPreviewResource(get_invitation_preview))
    for action in ("accept", "decline", "cancel", "resend"):
        app.add_route(
            f"/v1/invitations/{{invitation_id:uuid}}/{action}",
            invitation_actions,
            suffix=action,
        )


def create_brandstage_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min,
        max_size=settings.database_pool_max,
    )
    uow_factory = create_uow_factory(pool)

    identity_provider = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    claims_publisher = (
        KeycloakClaimsPublisher(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if identity_provider is None:
        logger.warning("keycloak_not_configured")

    email_sender = PostmarkEmailSender(
        server_token=settings.postmark_server_token,
        from_email=settings.postmark_from_email,
        from_name=settings.postmark_from_name,
        message_stream=settings.postmark_message_stream,
        dev_mode=settings.email_dev_mode,
    )
    permission_checker = OrganizationPermissionChecker(uow_factory)
    claims_updater = (
        UpdateUserClaimsUseCase(
            unit_of_work_factory=uow_factory,
            claims_publisher=claims_publisher,
            max_bytes=settings.claims_max_bytes,
            warn_bytes=settings.claims_warn_bytes,
        )
        if claims_publisher
        else None
    )
    ttl = timedelta(days=settings.invitation_ttl_days)

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(identity_provider),
        ],
    )
    register_error_handlers(app)
    add_routes(
        app,
        uow_factory=uow_factory,
        permission_checker=permission_checker,
        create_organization=CreateOrganizationUseCase(uow_factory, claims_updater),
        initiate_deletion=InitiateOrganizationDeletionUseCase(
            uow_factory, email_sender, app_url=settings.app_url
        ),
        confirm_deletion=ConfirmOrganizationDeletionUseCase(
            uow_factory, email_sender, app_url=settings.app_url
        ),
        undo_deletion=UndoOrganizationDeletionUseCase(uow_factory),
        create_invitation=CreateInvitationUseCase(
            uow_factory, email_sender, app_url=settings.app_url, ttl=ttl
        ),
        accept_invitation=AcceptInvitationUseCase(uow_factory, claims_updater),
        decline_invitation=DeclineInvitationUseCase(uow_factory),
        cancel_invitation=CancelInvitationUseCase(uow_factory),
        resend_invitation=ResendInvitationUseCase(
            uow_factory, email_sender, app_url=settings.app_url, ttl=ttl
        ),
        get_invitation_preview=GetInvitationPreviewUseCase(uow_factory),
        list_pending_invitations=ListPendingInvitationsUseCase(uow_factory),
        update_member=UpdateMemberUseCase(uow_factory, claims_updater),
        health_resource=HealthResource(pool),
    )
    return app
