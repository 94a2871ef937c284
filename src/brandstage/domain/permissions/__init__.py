"""Permission catalog and authorization evaluator."""

from brandstage.domain.permissions.catalog import (
    ALL_PERMISSIONS,
    ROLE_PERMISSIONS,
    WILDCARD,
    get_permissions_for_role,
    role_has_permission,
)
from brandstage.domain.permissions.evaluator import (
    can_access_brand_resource,
    can_invite_role,
    can_modify_member_role,
    effective_permissions,
    has_all_permissions,
    has_any_permission,
    has_brand_access,
    has_permission,
    require_brand_access,
    require_permission,
)

__all__ = [
    "ALL_PERMISSIONS",
    "ROLE_PERMISSIONS",
    "WILDCARD",
    "can_access_brand_resource",
    "can_invite_role",
    "can_modify_member_role",
    "effective_permissions",
    "get_permissions_for_role",
    "has_all_permissions",
    "has_any_permission",
    "has_brand_access",
    "has_permission",
    "require_brand_access",
    "require_permission",
    "role_has_permission",
]
