"""Member DTOs."""

from dataclasses import dataclass

from brandstage.domain.value_objects import OrganizationRole


@dataclass
class UpdateMemberInput:
    """Partial update; None leaves a field unchanged."""

    role: OrganizationRole | None = None
    brand_access: list[str] | None = None
    auto_grant_new_brands: bool | None = None

    @property
    def changes_access(self) -> bool:
        return self.brand_access is not None or self.auto_grant_new_brands is not None
