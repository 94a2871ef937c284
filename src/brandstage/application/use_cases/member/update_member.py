"""Update member use case - role and brand access changes."""

from uuid import UUID

import structlog

from brandstage.application.dto import UpdateMemberInput
from brandstage.application.ports import Identity
from brandstage.application.use_cases.claims.update_user_claims import (
    UpdateUserClaimsUseCase,
    sync_claims,
)
from brandstage.domain.entities import OrganizationMember
from brandstage.domain.exceptions import AuthorizationError, NotFound, ValidationError
from brandstage.domain.permissions import (
    can_invite_role,
    can_modify_member_role,
    has_permission,
)
from brandstage.domain.permissions.catalog import USERS_UPDATE_ACCESS, USERS_UPDATE_ROLE
from brandstage.domain.value_objects import OrganizationRole

logger = structlog.get_logger()


class UpdateMemberUseCase:
    """Change a member's role or brand scope, then resync their claims."""

    def __init__(
        self,
        unit_of_work_factory: type,
        claims_updater: UpdateUserClaimsUseCase | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._claims_updater = claims_updater

    async def execute(
        self,
        actor: Identity,
        organization_id: UUID,
        member_id: UUID,
        data: UpdateMemberInput,
    ) -> OrganizationMember:
        if data.role is None and not data.changes_access:
            raise ValidationError("Nothing to update")

        async with self._uow_factory() as uow:
            target = await uow.members.get_by_id(member_id)
            if not target:
                raise NotFound("Member", member_id)
            if target.organization_id != organization_id:
                raise ValidationError("Member does not belong to this organization")

            acting = await uow.members.get_for_user(organization_id, actor.user_id)
            if not acting:
                raise AuthorizationError("You are not a member of this organization")

            if data.role is not None:
                try:
                    new_role = OrganizationRole(data.role)
                except ValueError as e:
                    raise ValidationError(f"Invalid role: {data.role}") from e
                if not has_permission(acting, USERS_UPDATE_ROLE):
                    raise AuthorizationError("You do not have permission to change member roles")
                if target.user_id == actor.user_id:
                    raise ValidationError("You cannot change your own role")
                if not can_modify_member_role(acting, target):
                    raise AuthorizationError("You cannot modify this member's role")
                # Same ceiling as invitations: only wildcard holders hand out owner
                if not can_invite_role(acting, new_role):
                    raise AuthorizationError(f"You cannot assign the {new_role} role")
                target.role = new_role

            if data.changes_access:
                if not has_permission(acting, USERS_UPDATE_ACCESS):
                    raise AuthorizationError("You do not have permission to change member access")
                if data.brand_access is not None:
                    target.brand_access = list(data.brand_access)
                if data.auto_grant_new_brands is not None:
                    target.auto_grant_new_brands = data.auto_grant_new_brands

            await uow.members.update(target)

        logger.info(
            "member_updated",
            organization_id=str(organization_id),
            member_id=str(member_id),
            user_id=actor.user_id,
            role=str(target.role),
        )
        await sync_claims(self._claims_updater, target.user_id)
        return target
