"""Authorization evaluator - pure predicates over an organization member.

Predicates never raise: malformed input resolves to the empty permission set
and therefore to False. The ``require_*`` helpers raise AuthorizationError for
callers that want an exception instead.
"""

from collections.abc import Iterable

from brandstage.domain.entities import OrganizationMember
from brandstage.domain.exceptions import AuthorizationError
from brandstage.domain.permissions.catalog import (
    USERS_INVITE,
    WILDCARD,
    get_permissions_for_role,
)
from brandstage.domain.value_objects import OrganizationRole


def effective_permissions(member: OrganizationMember) -> frozenset[str]:
    """Explicit permissions when set, otherwise the role defaults. Never a union."""
    explicit = getattr(member, "permissions", None)
    if isinstance(explicit, str):
        return frozenset()
    if explicit:
        try:
            return frozenset(p for p in explicit if isinstance(p, str))
        except TypeError:
            return frozenset()
    try:
        return get_permissions_for_role(getattr(member, "role", None))
    except TypeError:
        return frozenset()


def has_permission(member: OrganizationMember, permission: str) -> bool:
    permissions = effective_permissions(member)
    return WILDCARD in permissions or permission in permissions


def has_any_permission(member: OrganizationMember, permissions: Iterable[str]) -> bool:
    return any(has_permission(member, p) for p in permissions)


def has_all_permissions(member: OrganizationMember, permissions: Iterable[str]) -> bool:
    return all(has_permission(member, p) for p in permissions)


def has_brand_access(member: OrganizationMember, brand_id: str) -> bool:
    """Empty brand_access grants ALL brands; otherwise brand_id must be listed.

    This is the only place the emptiness rule is spelled out.
    """
    brand_access = getattr(member, "brand_access", None)
    if brand_access is None or isinstance(brand_access, str):
        return False
    try:
        return len(brand_access) == 0 or brand_id in brand_access
    except TypeError:
        return False


def can_access_brand_resource(
    member: OrganizationMember, permission: str, brand_id: str
) -> bool:
    """Permission check and brand check, both required."""
    return has_permission(member, permission) and has_brand_access(member, brand_id)


def can_invite_role(member: OrganizationMember, target_role: OrganizationRole | str) -> bool:
    """Only wildcard holders may invite owners; other roles need users:invite."""
    permissions = effective_permissions(member)
    if target_role == OrganizationRole.OWNER:
        return WILDCARD in permissions
    if target_role in (OrganizationRole.ADMIN, OrganizationRole.MEMBER):
        return WILDCARD in permissions or USERS_INVITE in permissions
    return False


def can_modify_member_role(actor: OrganizationMember, target: OrganizationMember) -> bool:
    """Members modify nobody, admins modify members, owners modify non-owners."""
    if actor.role == OrganizationRole.ADMIN:
        return target.role == OrganizationRole.MEMBER
    if actor.role == OrganizationRole.OWNER:
        return target.role != OrganizationRole.OWNER
    return False


def require_permission(member: OrganizationMember, permission: str, message: str | None = None) -> None:
    if not has_permission(member, permission):
        raise AuthorizationError(message or f"Missing required permission: {permission}")


def require_brand_access(member: OrganizationMember, brand_id: str) -> None:
    if not has_brand_access(member, brand_id):
        raise AuthorizationError(f"No access to brand {brand_id}")
