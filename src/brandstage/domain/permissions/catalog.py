"""Permission catalog - the single role to permission table.

Both the live evaluator and the claims encoder read from here.
"""

from types import MappingProxyType

from brandstage.domain.value_objects import OrganizationRole

WILDCARD = "*"

# Organization
ORG_UPDATE = "org:update"
ORG_DELETE = "org:delete"
ORG_TRANSFER = "org:transfer"
ORG_VIEW_BILLING = "org:view_billing"
ORG_MANAGE_BILLING = "org:manage_billing"
ORG_VIEW_SETTINGS = "org:view_settings"

# Users
USERS_INVITE = "users:invite"
USERS_VIEW = "users:view"
USERS_UPDATE_ROLE = "users:update_role"
USERS_UPDATE_ACCESS = "users:update_access"
USERS_REMOVE = "users:remove"

# Brands
BRANDS_CREATE = "brands:create"
BRANDS_VIEW = "brands:view"
BRANDS_UPDATE = "brands:update"
BRANDS_DELETE = "brands:delete"
BRANDS_MANAGE_TEAM = "brands:manage_team"

# Events
EVENTS_CREATE = "events:create"
EVENTS_VIEW = "events:view"
EVENTS_UPDATE = "events:update"
EVENTS_PUBLISH = "events:publish"
EVENTS_DELETE = "events:delete"
EVENTS_MANAGE_MODULES = "events:manage_modules"
EVENTS_MODERATE = "events:moderate"

# Analytics
ANALYTICS_VIEW_ORG = "analytics:view_org"
ANALYTICS_VIEW_BRAND = "analytics:view_brand"
ANALYTICS_VIEW_EVENT = "analytics:view_event"
ANALYTICS_EXPORT = "analytics:export"

ORGANIZATION_PERMISSIONS = (
    ORG_UPDATE,
    ORG_DELETE,
    ORG_TRANSFER,
    ORG_VIEW_BILLING,
    ORG_MANAGE_BILLING,
    ORG_VIEW_SETTINGS,
)
USER_MANAGEMENT_PERMISSIONS = (
    USERS_INVITE,
    USERS_VIEW,
    USERS_UPDATE_ROLE,
    USERS_UPDATE_ACCESS,
    USERS_REMOVE,
)
BRAND_MANAGEMENT_PERMISSIONS = (
    BRANDS_CREATE,
    BRANDS_VIEW,
    BRANDS_UPDATE,
    BRANDS_DELETE,
    BRANDS_MANAGE_TEAM,
)
EVENT_MANAGEMENT_PERMISSIONS = (
    EVENTS_CREATE,
    EVENTS_VIEW,
    EVENTS_UPDATE,
    EVENTS_PUBLISH,
    EVENTS_DELETE,
    EVENTS_MANAGE_MODULES,
    EVENTS_MODERATE,
)
ANALYTICS_PERMISSIONS = (
    ANALYTICS_VIEW_ORG,
    ANALYTICS_VIEW_BRAND,
    ANALYTICS_VIEW_EVENT,
    ANALYTICS_EXPORT,
)

ALL_PERMISSIONS: tuple[str, ...] = (
    *ORGANIZATION_PERMISSIONS,
    *USER_MANAGEMENT_PERMISSIONS,
    *BRAND_MANAGEMENT_PERMISSIONS,
    *EVENT_MANAGEMENT_PERMISSIONS,
    *ANALYTICS_PERMISSIONS,
)

_OWNER = frozenset({WILDCARD})

# No billing, settings, transfer or org deletion
_ADMIN = frozenset(
    {
        ORG_UPDATE,
        *USER_MANAGEMENT_PERMISSIONS,
        *BRAND_MANAGEMENT_PERMISSIONS,
        *EVENT_MANAGEMENT_PERMISSIONS,
        *ANALYTICS_PERMISSIONS,
    }
)

# Scoped to brand_access by callers
_MEMBER = frozenset(
    {
        USERS_VIEW,
        BRANDS_VIEW,
        BRANDS_UPDATE,
        *EVENT_MANAGEMENT_PERMISSIONS,
        ANALYTICS_VIEW_BRAND,
        ANALYTICS_VIEW_EVENT,
        ANALYTICS_EXPORT,
    }
)

ROLE_PERMISSIONS: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {
        OrganizationRole.OWNER: _OWNER,
        OrganizationRole.ADMIN: _ADMIN,
        OrganizationRole.MEMBER: _MEMBER,
    }
)

_DISPLAY_NAMES = MappingProxyType(
    {
        OrganizationRole.OWNER: "Owner",
        OrganizationRole.ADMIN: "Admin",
        OrganizationRole.MEMBER: "Member",
    }
)

_DESCRIPTIONS = MappingProxyType(
    {
        OrganizationRole.OWNER: "Full control over organisation, billing, and all resources",
        OrganizationRole.ADMIN: "Manage team members and all brands/events",
        OrganizationRole.MEMBER: "Access to assigned brands only",
    }
)


def get_permissions_for_role(role: OrganizationRole | str) -> frozenset[str]:
    """Default permissions for a role. Unknown roles get the empty set."""
    return ROLE_PERMISSIONS.get(role, frozenset())


def role_has_permission(role: OrganizationRole | str, permission: str) -> bool:
    """Whether a role grants a permission by default."""
    permissions = get_permissions_for_role(role)
    return WILDCARD in permissions or permission in permissions


def role_display_name(role: OrganizationRole | str) -> str:
    return _DISPLAY_NAMES.get(role, str(role).title())


def role_description(role: OrganizationRole | str) -> str:
    return _DESCRIPTIONS.get(role, "")
