"""Accept invitation use case."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog

from brandstage.application.dto import AcceptedInvitation
from brandstage.application.ports import Identity, UnitOfWork
from brandstage.application.use_cases.claims.update_user_claims import (
    UpdateUserClaimsUseCase,
    sync_claims,
)
from brandstage.domain.entities import Invitation, OrganizationMember, UserProfile
from brandstage.domain.exceptions import (
    AuthorizationError,
    BrandStageError,
    NotFound,
    StateError,
    ValidationError,
)
from brandstage.domain.value_objects import InvitationStatus, normalize_email

logger = structlog.get_logger()


def check_acceptable(invitation: Invitation, now: datetime) -> None:
    """Raise StateError unless the invitation is pending and unexpired."""
    if invitation.is_actionable(now):
        return
    if invitation.status != InvitationStatus.PENDING:
        raise StateError(f"Invitation is {invitation.status}")
    raise StateError("Invitation has expired")


@dataclass
class AcceptManyResult:
    """Per-invitation outcome of a batch accept."""

    accepted: list[UUID] = field(default_factory=list)
    skipped: list[UUID] = field(default_factory=list)
    errors: list[UUID] = field(default_factory=list)


class AcceptInvitationUseCase:
    """Invitee joins the organization: membership and status change in one transaction."""

    def __init__(
        self,
        unit_of_work_factory: type,
        claims_updater: UpdateUserClaimsUseCase | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._claims_updater = claims_updater

    async def execute(self, actor: Identity, invitation_id: UUID) -> AcceptedInvitation:
        """Accept one invitation, then resync the caller's claims."""
        result = await self._accept_one(actor, self._actor_email(actor), invitation_id)
        await sync_claims(self._claims_updater, actor.user_id)
        return result

    async def execute_many(self, actor: Identity, invitation_ids: list[UUID]) -> AcceptManyResult:
        """Accept several invitations; non-pending or expired ones are skipped."""
        if not invitation_ids:
            raise ValidationError("invitation_ids must be a non-empty list")
        email = self._actor_email(actor)

        outcome = AcceptManyResult()
        for invitation_id in invitation_ids:
            try:
                await self._accept_one(actor, email, invitation_id)
            except StateError:
                outcome.skipped.append(invitation_id)
            except BrandStageError as e:
                logger.warning(
                    "invitation_accept_failed",
                    invitation_id=str(invitation_id),
                    kind=e.kind,
                    message=e.message,
                )
                outcome.errors.append(invitation_id)
            else:
                outcome.accepted.append(invitation_id)

        if outcome.accepted:
            await sync_claims(self._claims_updater, actor.user_id)
        return outcome

    async def _accept_one(
        self, actor: Identity, email: str, invitation_id: UUID
    ) -> AcceptedInvitation:
        """Expired invitations are flipped to expired and committed before StateError is raised."""
        now = datetime.now(UTC)
        expired = False
        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_id(invitation_id, for_update=True)
            if not invitation:
                raise NotFound("Invitation", invitation_id)
            if invitation.email != email:
                raise AuthorizationError("This invitation was sent to a different email address")

            if invitation.status == InvitationStatus.PENDING and invitation.is_expired(now):
                invitation.status = InvitationStatus.EXPIRED
                await uow.invitations.update(invitation)
                expired = True
            else:
                check_acceptable(invitation, now)
                await uow.users.upsert(
                    UserProfile(id=actor.user_id, email=email, display_name=actor.name or "")
                )
                result = await self._accept(uow, invitation, actor.user_id, now)

        if expired:
            logger.info("invitation_expired", invitation_id=str(invitation_id))
            raise StateError("Invitation has expired")

        logger.info(
            "invitation_accepted",
            invitation_id=str(invitation_id),
            organization_id=str(result.organization_id),
            user_id=actor.user_id,
            already_member=result.already_member,
        )
        return result

    @staticmethod
    def _actor_email(actor: Identity) -> str:
        email = normalize_email(actor.email or "")
        if not email:
            raise ValidationError("User account has no email address")
        return email

    async def _accept(
        self, uow: UnitOfWork, invitation: Invitation, user_id: str, now: datetime
    ) -> AcceptedInvitation:
        existing = await uow.members.get_for_user(invitation.organization_id, user_id)
        member_id = existing.id if existing else None
        if not existing:
            member = OrganizationMember(
                id=uuid4(),
                organization_id=invitation.organization_id,
                user_id=user_id,
                role=invitation.role,
                joined_at=now,
                permissions=[],
                brand_access=list(invitation.brand_access),
                auto_grant_new_brands=invitation.auto_grant_new_brands,
                invited_at=invitation.invited_at,
                invited_by=invitation.invited_by,
            )
            await uow.members.create(member)
            member_id = member.id

        invitation.status = InvitationStatus.ACCEPTED
        invitation.accepted_at = now
        await uow.invitations.update(invitation)
        return AcceptedInvitation(
            invitation_id=invitation.id,
            organization_id=invitation.organization_id,
            member_id=member_id,
            already_member=existing is not None,
        )
