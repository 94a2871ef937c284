"""Create organization use case."""

from datetime import UTC, datetime
from uuid import uuid4

import structlog

from brandstage.application.dto import CreateOrganizationInput
from brandstage.application.ports import Identity
from brandstage.application.use_cases.claims.update_user_claims import (
    UpdateUserClaimsUseCase,
    sync_claims,
)
from brandstage.domain.entities import Organization, OrganizationMember, UserProfile
from brandstage.domain.exceptions import ValidationError
from brandstage.domain.value_objects import OrganizationRole, OrganizationType, normalize_email

logger = structlog.get_logger()

MAX_NAME_LENGTH = 100


class CreateOrganizationUseCase:
    """Create organization and its owner membership in one transaction."""

    def __init__(
        self,
        unit_of_work_factory: type,
        claims_updater: UpdateUserClaimsUseCase | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._claims_updater = claims_updater

    async def execute(self, actor: Identity, data: CreateOrganizationInput) -> Organization:
        """Create organization; creator becomes owner with access to all brands."""
        name = (data.name or "").strip()
        if not name or len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Organization name must be 1-{MAX_NAME_LENGTH} characters")
        try:
            org_type = OrganizationType(data.type)
        except ValueError as e:
            raise ValidationError(f"Invalid organization type: {data.type}") from e
        billing_email = normalize_email(data.billing_email or "")
        if "@" not in billing_email:
            raise ValidationError("Invalid billing email")

        now = datetime.now(UTC)
        organization = Organization(
            id=uuid4(),
            name=name,
            type=org_type,
            billing_email=billing_email,
            created_by=actor.user_id,
            created_at=now,
        )
        owner = OrganizationMember(
            id=uuid4(),
            organization_id=organization.id,
            user_id=actor.user_id,
            role=OrganizationRole.OWNER,
            joined_at=now,
            brand_access=[],
            auto_grant_new_brands=True,
        )
        async with self._uow_factory() as uow:
            await uow.organizations.create(organization)
            await uow.members.create(owner)
            if actor.email:
                await uow.users.upsert(
                    UserProfile(
                        id=actor.user_id,
                        email=normalize_email(actor.email),
                        display_name=actor.name or "",
                    )
                )

        logger.info("organization_created", organization_id=str(organization.id), user_id=actor.user_id)
        await sync_claims(self._claims_updater, actor.user_id)
        return organization
