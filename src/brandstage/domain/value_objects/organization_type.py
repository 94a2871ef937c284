"""Organization tiers."""

from enum import StrEnum


class OrganizationType(StrEnum):
    """Organization type - drives billing structure."""

    INDIVIDUAL = "individual"
    TEAM = "team"
    ENTERPRISE = "enterprise"
