"""Organization member API resources."""

from uuid import UUID

import falcon.asgi

from brandstage.application.dto import UpdateMemberInput
from brandstage.application.ports import PermissionChecker
from brandstage.application.use_cases.member.update_member import UpdateMemberUseCase
from brandstage.domain.entities import OrganizationMember
from brandstage.domain.exceptions import AuthorizationError, ValidationError
from brandstage.domain.permissions import effective_permissions
from brandstage.domain.permissions.catalog import USERS_VIEW
from brandstage.interfaces.api.middleware.auth import current_user
from brandstage.interfaces.api.schemas import UpdateMemberRequest, parse_body


def member_to_dict(member: OrganizationMember) -> dict:
    return {
        "id": str(member.id),
        "organization_id": str(member.organization_id),
        "user_id": member.user_id,
        "role": str(member.role),
        "permissions": list(member.permissions),
        "brand_access": list(member.brand_access),
        "auto_grant_new_brands": member.auto_grant_new_brands,
        "joined_at": member.joined_at.isoformat(),
        "invited_by": member.invited_by,
    }


class MembersResource:
    """GET /v1/organizations/{organization_id}/members - list members (users:view)."""

    def __init__(self, unit_of_work_factory: type, permission_checker: PermissionChecker) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, organization_id: UUID
    ) -> None:
        user = current_user(req)
        if not await self._permission_checker.check(user.user_id, organization_id, USERS_VIEW):
            raise AuthorizationError("You do not have permission to view members")
        async with self._uow_factory() as uow:
            members = await uow.members.list_for_organization(organization_id)
        resp.media = {"items": [member_to_dict(m) for m in members]}
        resp.status = falcon.HTTP_200


class MemberResource:
    """PATCH /v1/organizations/{organization_id}/members/{member_id} - change role or access."""

    def __init__(self, update_member: UpdateMemberUseCase) -> None:
        self._update = update_member

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        organization_id: UUID,
        member_id: UUID,
    ) -> None:
        user = current_user(req)
        body = await parse_body(req, UpdateMemberRequest)
        member = await self._update.execute(
            user,
            organization_id,
            member_id,
            UpdateMemberInput(
                role=body.role,
                brand_access=body.brand_access,
                auto_grant_new_brands=body.auto_grant_new_brands,
            ),
        )
        resp.media = member_to_dict(member)
        resp.status = falcon.HTTP_200


class MyPermissionsResource:
    """GET /v1/organizations/{organization_id}/permissions/me - caller's effective permissions.

    With ?permission=...&brand_id=... the response also carries an ``allowed`` verdict.
    """

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, organization_id: UUID
    ) -> None:
        user = current_user(req)
        member = await self._permission_checker.get_member(user.user_id, organization_id)
        if not member:
            raise AuthorizationError("You are not a member of this organization")

        media = {
            "role": str(member.role),
            "permissions": sorted(effective_permissions(member)),
            "brand_access": list(member.brand_access),
        }
        permission = req.get_param("permission")
        brand_id = req.get_param("brand_id")
        if brand_id and not permission:
            raise ValidationError("brand_id requires permission")
        if permission:
            media["allowed"] = await self._permission_checker.check(
                user.user_id, organization_id, permission, brand_id
            )
        resp.media = media
        resp.status = falcon.HTTP_200
