"""Organization member entity - one user's relationship to one organization."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from brandstage.domain.value_objects import OrganizationRole


@dataclass
class OrganizationMember:
    """Membership with role, optional explicit permissions and brand scope.

    ``permissions`` empty means "derive from role".
    ``brand_access`` empty means access to ALL brands.
    """

    id: UUID
    organization_id: UUID
    user_id: str
    role: OrganizationRole | str
    joined_at: datetime
    permissions: list[str] = field(default_factory=list)
    brand_access: list[str] = field(default_factory=list)
    auto_grant_new_brands: bool = False
    invited_at: datetime | None = None
    invited_by: str | None = None
