"""Claims encoder - compact token claims mirrored from organization memberships.

Payload shape::

    {"orgs": {"<org_id>": {"p": ["ui", "bv", ...], "b": ["<brand_id>", ...]}}, "cv": 3}

``p`` holds abbreviated permissions, ``b`` the brand scope (empty = all brands)
and ``cv`` the claims version clients compare to decide when to refresh.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import structlog

from brandstage.domain.entities import OrganizationMember
from brandstage.domain.exceptions import SizeLimitError
from brandstage.domain.permissions.catalog import ALL_PERMISSIONS, WILDCARD
from brandstage.domain.permissions.evaluator import effective_permissions

logger = structlog.get_logger()

MAX_CLAIMS_BYTES = 1000
WARN_CLAIMS_BYTES = 950

PERMISSION_ABBREVIATIONS: MappingProxyType[str, str] = MappingProxyType(
    {
        "*": "*",
        "org:update": "ou",
        "org:delete": "od",
        "org:transfer": "ot",
        "org:view_billing": "ovb",
        "org:manage_billing": "omb",
        "org:view_settings": "ovs",
        "users:invite": "ui",
        "users:view": "uv",
        "users:update_role": "uur",
        "users:update_access": "uua",
        "users:remove": "ur",
        "brands:create": "bc",
        "brands:view": "bv",
        "brands:update": "bu",
        "brands:delete": "bd",
        "brands:manage_team": "bmt",
        "events:create": "ec",
        "events:view": "ev",
        "events:update": "eu",
        "events:publish": "ep",
        "events:delete": "ed",
        "events:manage_modules": "emm",
        "events:moderate": "emo",
        "analytics:view_org": "avo",
        "analytics:view_brand": "avb",
        "analytics:view_event": "ave",
        "analytics:export": "ae",
    }
)

PERMISSION_EXPANSIONS: MappingProxyType[str, str] = MappingProxyType(
    {short: full for full, short in PERMISSION_ABBREVIATIONS.items()}
)

_CATALOG_ORDER = {p: i for i, p in enumerate((WILDCARD, *ALL_PERMISSIONS))}


def abbreviate_permission(permission: str) -> str:
    """Short code for a permission; unknown strings pass through unchanged."""
    return PERMISSION_ABBREVIATIONS.get(permission, permission)


def expand_permission(code: str) -> str:
    """Reverse of abbreviate_permission; unknown codes pass through unchanged."""
    return PERMISSION_EXPANSIONS.get(code, code)


@dataclass(frozen=True)
class ClaimsBuild:
    """Result of encoding: the payload to publish and its serialized size."""

    payload: dict[str, Any]
    size: int
    fell_back: bool = False


def serialize_claims(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def claims_size(payload: dict[str, Any]) -> int:
    """Byte length of the compact UTF-8 JSON encoding."""
    return len(serialize_claims(payload).encode("utf-8"))


def _ordered(permissions: Iterable[str]) -> list[str]:
    return sorted(permissions, key=lambda p: (_CATALOG_ORDER.get(p, len(_CATALOG_ORDER)), p))


def encode_memberships(
    memberships: Iterable[OrganizationMember], current_version: int
) -> dict[str, Any]:
    """Payload for a set of memberships, no size governance."""
    orgs: dict[str, dict[str, list[str]]] = {}
    for membership in sorted(memberships, key=lambda m: str(m.organization_id)):
        permissions = _ordered(effective_permissions(membership))
        orgs[str(membership.organization_id)] = {
            "p": [abbreviate_permission(p) for p in permissions],
            "b": list(membership.brand_access or []),
        }
    return {"orgs": orgs, "cv": current_version + 1}


def _check_size(size: int, max_bytes: int) -> None:
    if size > max_bytes:
        raise SizeLimitError(size, max_bytes)


def build_user_claims(
    memberships: Iterable[OrganizationMember],
    current_version: int,
    *,
    max_bytes: int = MAX_CLAIMS_BYTES,
    warn_bytes: int = WARN_CLAIMS_BYTES,
) -> ClaimsBuild:
    """Encode memberships into a claims payload with cv = current_version + 1.

    Oversized payloads are replaced by ``{"orgs": {}, "cv": current_version + 1}``
    so the client still sees a version bump and falls back to live lookups.
    """
    memberships = list(memberships)
    payload = encode_memberships(memberships, current_version)
    size = claims_size(payload)

    if size > warn_bytes:
        logger.warning(
            "claims_size_near_limit",
            size=size,
            limit=max_bytes,
            org_count=len(memberships),
        )

    try:
        _check_size(size, max_bytes)
    except SizeLimitError as e:
        logger.error("claims_size_exceeded", size=e.size, limit=e.limit)
        fallback = {"orgs": {}, "cv": current_version + 1}
        return ClaimsBuild(payload=fallback, size=claims_size(fallback), fell_back=True)

    return ClaimsBuild(payload=payload, size=size)
