"""Organization API resources."""

from uuid import UUID

import falcon.asgi

from brandstage.application.dto import CreateOrganizationInput
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
from brandstage.interfaces.api.middleware.auth import current_user
from brandstage.interfaces.api.schemas import (
    CreateOrganizationRequest,
    DeletionTokenRequest,
    InitiateDeletionRequest,
    parse_body,
)


class OrganizationsResource:
    """POST /v1/organizations - create organization with the caller as owner."""

    def __init__(self, create_organization: CreateOrganizationUseCase) -> None:
        self._create = create_organization

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = current_user(req)
        body = await parse_body(req, CreateOrganizationRequest)
        org = await self._create.execute(
            user,
            CreateOrganizationInput(name=body.name, type=body.type, billing_email=body.billing_email),
        )
        resp.media = {
            "id": str(org.id),
            "name": org.name,
            "type": str(org.type),
            "billing_email": org.billing_email,
            "created_by": org.created_by,
            "created_at": org.created_at.isoformat(),
        }
        resp.status = falcon.HTTP_201


class OrganizationDeletionResource:
    """POST /v1/organizations/{organization_id}/deletion - request deletion by email confirmation."""

    def __init__(self, initiate_deletion: InitiateOrganizationDeletionUseCase) -> None:
        self._initiate = initiate_deletion

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, organization_id: UUID
    ) -> None:
        user = current_user(req)
        body = await parse_body(req, InitiateDeletionRequest)
        result = await self._initiate.execute(user, organization_id, body.confirmation_name)
        resp.media = {
            "request_id": str(result.request_id),
            "organization_id": str(result.organization_id),
            "message": "Confirmation email sent",
        }
        resp.status = falcon.HTTP_202


class DeletionConfirmResource:
    """POST /v1/organization-deletions/{request_id}/confirm - the emailed link; token is the credential."""

    def __init__(self, confirm_deletion: ConfirmOrganizationDeletionUseCase) -> None:
        self._confirm = confirm_deletion

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, request_id: UUID
    ) -> None:
        body = await parse_body(req, DeletionTokenRequest)
        result = await self._confirm.execute(request_id, body.token)
        resp.media = {
            "request_id": str(result.request_id),
            "organization_id": str(result.organization_id),
            "scheduled_deletion_at": result.scheduled_deletion_at.isoformat(),
            "undo_expires_at": result.undo_expires_at.isoformat(),
        }


class DeletionUndoResource:
    """POST /v1/organization-deletions/{request_id}/undo - restore within the undo window."""

    def __init__(self, undo_deletion: UndoOrganizationDeletionUseCase) -> None:
        self._undo = undo_deletion

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, request_id: UUID
    ) -> None:
        user = current_user(req)
        body = await parse_body(req, DeletionTokenRequest)
        request = await self._undo.execute(user, request_id, body.token)
        resp.media = {
            "request_id": str(request.id),
            "organization_id": str(request.organization_id),
            "status": str(request.status),
        }
