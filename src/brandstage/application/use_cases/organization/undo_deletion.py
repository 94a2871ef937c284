"""Undo organization deletion use case."""

import secrets
from datetime import UTC, datetime
from uuid import UUID

import structlog

from brandstage.application.ports import Identity
from brandstage.domain.entities import OrganizationDeletionRequest
from brandstage.domain.exceptions import AuthorizationError, NotFound, StateError, ValidationError
from brandstage.domain.permissions import has_permission
from brandstage.domain.permissions.catalog import ORG_DELETE
from brandstage.domain.value_objects import DeletionStatus

logger = structlog.get_logger()


class UndoOrganizationDeletionUseCase:
    """Cancel a confirmed deletion and restore the organization within the undo window."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self, actor: Identity, request_id: UUID, token: str
    ) -> OrganizationDeletionRequest:
        if not token:
            raise ValidationError("token is required")

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            request = await uow.deletion_requests.get_by_id(request_id, for_update=True)
            if not request:
                raise NotFound("Deletion request", request_id)
            if not request.undo_token or not secrets.compare_digest(
                request.undo_token.encode(), token.encode()
            ):
                raise ValidationError("Invalid undo token")
            if request.status != DeletionStatus.CONFIRMED_DELETION:
                raise StateError(f"Cannot undo a deletion request that is {request.status}")
            if request.is_undo_expired(now):
                raise StateError("The undo window has expired")

            member = await uow.members.get_for_user(request.organization_id, actor.user_id)
            if not member:
                raise AuthorizationError("You are not a member of this organization")
            if not has_permission(member, ORG_DELETE):
                raise AuthorizationError("You do not have permission to undo this deletion")

            request.status = DeletionStatus.CANCELLED
            await uow.deletion_requests.update(request)
            await uow.organizations.set_soft_deleted(request.organization_id, None)
            await uow.organizations.set_deletion_request(request.organization_id, None)

        logger.info(
            "organization_deletion_undone",
            organization_id=str(request.organization_id),
            request_id=str(request.id),
            user_id=actor.user_id,
        )
        return request
