"""Unit tests for the permission catalog and authorization evaluator."""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from brandstage.domain.exceptions import AuthorizationError
from brandstage.domain.permissions import (
    ALL_PERMISSIONS,
    ROLE_PERMISSIONS,
    WILDCARD,
    can_access_brand_resource,
    can_invite_role,
    can_modify_member_role,
    effective_permissions,
    get_permissions_for_role,
    has_all_permissions,
    has_any_permission,
    has_brand_access,
    has_permission,
    require_brand_access,
    require_permission,
    role_has_permission,
)
from brandstage.domain.permissions import catalog
from brandstage.domain.value_objects import OrganizationRole

from tests.conftest import make_member

ORG = uuid4()


# --- Catalog ---


def test_catalog_has_27_distinct_permissions() -> None:
    assert len(ALL_PERMISSIONS) == 27
    assert len(set(ALL_PERMISSIONS)) == 27
    assert all(":" in p for p in ALL_PERMISSIONS)


def test_owner_is_wildcard_only() -> None:
    assert get_permissions_for_role(OrganizationRole.OWNER) == frozenset({WILDCARD})


def test_admin_lacks_org_level_permissions() -> None:
    admin = get_permissions_for_role(OrganizationRole.ADMIN)
    excluded = {
        catalog.ORG_DELETE,
        catalog.ORG_TRANSFER,
        catalog.ORG_VIEW_BILLING,
        catalog.ORG_MANAGE_BILLING,
        catalog.ORG_VIEW_SETTINGS,
    }
    assert admin == frozenset(ALL_PERMISSIONS) - excluded
    assert catalog.ORG_UPDATE in admin


def test_member_permissions() -> None:
    assert get_permissions_for_role(OrganizationRole.MEMBER) == frozenset(
        {
            "users:view",
            "brands:view",
            "brands:update",
            "events:create",
            "events:view",
            "events:update",
            "events:publish",
            "events:delete",
            "events:manage_modules",
            "events:moderate",
            "analytics:view_brand",
            "analytics:view_event",
            "analytics:export",
        }
    )


def test_lookup_is_pure_and_accepts_plain_strings() -> None:
    assert get_permissions_for_role("admin") is get_permissions_for_role(OrganizationRole.ADMIN)
    assert get_permissions_for_role("admin") == get_permissions_for_role("admin")


def test_unknown_role_gets_nothing() -> None:
    assert get_permissions_for_role("superuser") == frozenset()
    assert not role_has_permission("superuser", "events:view")


def test_role_table_is_immutable() -> None:
    with pytest.raises(TypeError):
        ROLE_PERMISSIONS["owner"] = frozenset()  # type: ignore[index]
    with pytest.raises(AttributeError):
        get_permissions_for_role("member").add("org:delete")  # type: ignore[attr-defined]


def test_role_has_permission_wildcard() -> None:
    assert role_has_permission(OrganizationRole.OWNER, "org:delete")
    assert not role_has_permission(OrganizationRole.ADMIN, "org:delete")


def test_role_display() -> None:
    assert catalog.role_display_name(OrganizationRole.ADMIN) == "Admin"
    assert catalog.role_description(OrganizationRole.MEMBER)


# --- Evaluator ---


def test_wildcard_satisfies_every_check() -> None:
    owner = make_member(ORG, "u", OrganizationRole.OWNER)
    assert all(has_permission(owner, p) for p in ALL_PERMISSIONS)
    assert has_all_permissions(owner, ALL_PERMISSIONS)


def test_role_derived_permissions() -> None:
    member = make_member(ORG, "u", OrganizationRole.MEMBER)
    assert has_permission(member, "events:publish")
    assert not has_permission(member, "users:invite")


def test_explicit_permissions_override_role_not_union() -> None:
    """An admin with explicit [events:view] loses everything else the role grants."""
    m = make_member(ORG, "u", OrganizationRole.ADMIN, permissions=["events:view"])
    assert effective_permissions(m) == frozenset({"events:view"})
    assert has_permission(m, "events:view")
    assert not has_permission(m, "users:invite")


def test_explicit_wildcard() -> None:
    m = make_member(ORG, "u", OrganizationRole.MEMBER, permissions=["*"])
    assert has_permission(m, "org:delete")


def test_any_and_all() -> None:
    m = make_member(ORG, "u", OrganizationRole.MEMBER)
    assert has_any_permission(m, ["org:delete", "events:view"])
    assert not has_any_permission(m, ["org:delete", "users:invite"])
    assert not has_all_permissions(m, ["events:view", "users:invite"])
    assert not has_any_permission(m, [])
    assert has_all_permissions(m, [])


def test_empty_brand_access_means_all_brands() -> None:
    m = make_member(ORG, "u", OrganizationRole.MEMBER, brand_access=[])
    assert has_brand_access(m, "brand-x")
    assert has_brand_access(m, "anything")


def test_listed_brand_access() -> None:
    m = make_member(ORG, "u", OrganizationRole.MEMBER, brand_access=["b1", "b2"])
    assert has_brand_access(m, "b1")
    assert not has_brand_access(m, "b3")


def test_brand_resource_needs_both_checks() -> None:
    scoped = make_member(ORG, "u", OrganizationRole.MEMBER, brand_access=["b1"])
    assert can_access_brand_resource(scoped, "events:update", "b1")
    assert not can_access_brand_resource(scoped, "events:update", "b2")
    assert not can_access_brand_resource(scoped, "brands:delete", "b1")


def test_can_invite_role() -> None:
    owner = make_member(ORG, "o", OrganizationRole.OWNER)
    admin = make_member(ORG, "a", OrganizationRole.ADMIN)
    member = make_member(ORG, "m", OrganizationRole.MEMBER)

    assert can_invite_role(owner, OrganizationRole.OWNER)
    assert can_invite_role(owner, OrganizationRole.ADMIN)
    assert not can_invite_role(admin, OrganizationRole.OWNER)
    assert can_invite_role(admin, OrganizationRole.ADMIN)
    assert can_invite_role(admin, OrganizationRole.MEMBER)
    assert not can_invite_role(member, OrganizationRole.MEMBER)
    assert not can_invite_role(owner, "superuser")


def test_explicit_invite_permission_allows_admin_and_member_invites_only() -> None:
    m = make_member(ORG, "m", OrganizationRole.MEMBER, permissions=["users:invite"])
    assert can_invite_role(m, "member")
    assert can_invite_role(m, "admin")
    assert not can_invite_role(m, "owner")


@pytest.mark.parametrize(
    ("actor", "target", "allowed"),
    [
        (OrganizationRole.OWNER, OrganizationRole.OWNER, False),
        (OrganizationRole.OWNER, OrganizationRole.ADMIN, True),
        (OrganizationRole.OWNER, OrganizationRole.MEMBER, True),
        (OrganizationRole.ADMIN, OrganizationRole.OWNER, False),
        (OrganizationRole.ADMIN, OrganizationRole.ADMIN, False),
        (OrganizationRole.ADMIN, OrganizationRole.MEMBER, True),
        (OrganizationRole.MEMBER, OrganizationRole.MEMBER, False),
    ],
)
def test_can_modify_member_role(actor, target, allowed) -> None:
    assert can_modify_member_role(make_member(ORG, "a", actor), make_member(ORG, "t", target)) is allowed


def test_malformed_members_fail_closed() -> None:
    """Predicates never raise on malformed input; they deny."""
    junk = [
        SimpleNamespace(),
        SimpleNamespace(role=None, permissions=None, brand_access=None),
        SimpleNamespace(role=["owner"], permissions=None, brand_access=5),
        SimpleNamespace(role="owner", permissions="*", brand_access=None),
    ]
    for m in junk:
        assert not has_permission(m, "events:view")
        assert not has_brand_access(m, "b1")
        assert not can_access_brand_resource(m, "events:view", "b1")
        assert not can_invite_role(m, "member")
    assert not has_brand_access(SimpleNamespace(brand_access="brand-12"), "brand-1")
    assert not has_brand_access(SimpleNamespace(brand_access=""), "brand-1")


def test_require_helpers_raise() -> None:
    m = make_member(ORG, "u", OrganizationRole.MEMBER, brand_access=["b1"])
    require_permission(m, "events:view")
    require_brand_access(m, "b1")
    with pytest.raises(AuthorizationError, match="users:invite"):
        require_permission(m, "users:invite")
    with pytest.raises(AuthorizationError):
        require_brand_access(m, "b2")
