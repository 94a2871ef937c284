"""Organization roles."""

from enum import StrEnum


class OrganizationRole(StrEnum):
    """Role a member holds within an organization."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
