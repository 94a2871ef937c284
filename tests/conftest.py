"""Pytest fixtures for brandstage tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

import pytest

from brandstage.application.ports import Identity
from brandstage.domain.entities import (
    Invitation,
    Organization,
    OrganizationDeletionRequest,
    OrganizationMember,
    UserProfile,
)
from brandstage.domain.exceptions import ConflictError
from brandstage.domain.value_objects import (
    InvitationStatus,
    InvitationToken,
    OrganizationRole,
    OrganizationType,
)


class FakeOrganizationRepository:
    """In-memory organization repository for tests."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Organization] = {}

    async def get_by_id(self, organization_id: UUID) -> Organization | None:
        org = self._by_id.get(organization_id)
        return copy.deepcopy(org) if org and org.soft_deleted_at is None else None

    async def create(self, organization: Organization) -> Organization:
        self._by_id[organization.id] = copy.deepcopy(organization)
        return organization

    async def set_deletion_request(
        self, organization_id: UUID, deletion_request_id: UUID | None
    ) -> None:
        self._by_id[organization_id].deletion_request_id = deletion_request_id

    async def set_soft_deleted(
        self, organization_id: UUID, soft_deleted_at: datetime | None
    ) -> None:
        self._by_id[organization_id].soft_deleted_at = soft_deleted_at


class FakeMemberRepository:
    """In-memory membership repository. fail_on_create simulates a write failure."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, OrganizationMember] = {}
        self.fail_on_create = False

    async def get_by_id(self, member_id: UUID) -> OrganizationMember | None:
        m = self._by_id.get(member_id)
        return copy.deepcopy(m) if m else None

    async def get_for_user(self, organization_id: UUID, user_id: str) -> OrganizationMember | None:
        for m in self._by_id.values():
            if m.organization_id == organization_id and m.user_id == user_id:
                return copy.deepcopy(m)
        return None

    async def list_for_user(self, user_id: str) -> list[OrganizationMember]:
        return [copy.deepcopy(m) for m in self._by_id.values() if m.user_id == user_id]

    async def list_for_organization(self, organization_id: UUID) -> list[OrganizationMember]:
        return [
            copy.deepcopy(m) for m in self._by_id.values() if m.organization_id == organization_id
        ]

    async def create(self, member: OrganizationMember) -> OrganizationMember:
        if self.fail_on_create:
            raise RuntimeError("simulated write failure")
        self._by_id[member.id] = copy.deepcopy(member)
        return member

    async def update(self, member: OrganizationMember) -> None:
        self._by_id[member.id] = copy.deepcopy(member)


class FakeInvitationRepository:
    """In-memory invitation repository enforcing one pending invitation per (org, email)."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Invitation] = {}
        self.locked: list[UUID] = []

    async def get_by_id(self, invitation_id: UUID, for_update: bool = False) -> Invitation | None:
        inv = self._by_id.get(invitation_id)
        if inv and for_update:
            self.locked.append(invitation_id)
        return copy.deepcopy(inv) if inv else None

    async def get_by_token(self, token: str, for_update: bool = False) -> Invitation | None:
        for inv in self._by_id.values():
            if inv.token == token:
                return copy.deepcopy(inv)
        return None

    async def find_pending(self, organization_id: UUID, email: str) -> Invitation | None:
        for inv in self._by_id.values():
            if (
                inv.organization_id == organization_id
                and inv.email == email
                and inv.status == InvitationStatus.PENDING
            ):
                return copy.deepcopy(inv)
        return None

    async def list_pending_for_email(self, email: str) -> list[Invitation]:
        return [
            copy.deepcopy(inv)
            for inv in self._by_id.values()
            if inv.email == email and inv.status == InvitationStatus.PENDING
        ]

    async def create(self, invitation: Invitation) -> Invitation:
        existing = await self.find_pending(invitation.organization_id, invitation.email)
        if existing:
            raise ConflictError(
                "A pending invitation already exists for this email", existing_id=existing.id
            )
        self._by_id[invitation.id] = copy.deepcopy(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> None:
        self._by_id[invitation.id] = copy.deepcopy(invitation)

    def get(self, invitation_id: UUID) -> Invitation:
        return self._by_id[invitation_id]


class FakeUserRepository:
    """In-memory user profile repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, UserProfile] = {}
        self.fail_on_increment = False

    def add(self, profile: UserProfile) -> None:
        self._by_id[profile.id] = profile

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        p = self._by_id.get(user_id)
        return copy.deepcopy(p) if p else None

    async def get_many(self, user_ids: list[str]) -> list[UserProfile]:
        return [copy.deepcopy(self._by_id[u]) for u in user_ids if u in self._by_id]

    async def upsert(self, profile: UserProfile) -> None:
        existing = self._by_id.get(profile.id)
        if existing is None:
            self._by_id[profile.id] = UserProfile(
                id=profile.id, email=profile.email, display_name=profile.display_name or ""
            )
            return
        existing.email = profile.email
        if profile.display_name:
            existing.display_name = profile.display_name

    async def increment_claims_version(self, user_id: str) -> bool:
        if self.fail_on_increment:
            raise RuntimeError("simulated profile write failure")
        if user_id not in self._by_id:
            return False
        self._by_id[user_id].claims_version += 1
        return True


class FakeDeletionRequestRepository:
    """In-memory deletion request repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, OrganizationDeletionRequest] = {}
        self.locked: list[UUID] = []

    async def get_by_id(
        self, request_id: UUID, for_update: bool = False
    ) -> OrganizationDeletionRequest | None:
        r = self._by_id.get(request_id)
        if r and for_update:
            self.locked.append(request_id)
        return copy.deepcopy(r) if r else None

    async def create(self, request: OrganizationDeletionRequest) -> OrganizationDeletionRequest:
        self._by_id[request.id] = copy.deepcopy(request)
        return request

    async def update(self, request: OrganizationDeletionRequest) -> None:
        self._by_id[request.id] = copy.deepcopy(request)


class FakeUnitOfWork:
    """In-memory Unit of Work. Rollback restores the state captured on entry."""

    def __init__(self) -> None:
        self.organizations = FakeOrganizationRepository()
        self.members = FakeMemberRepository()
        self.invitations = FakeInvitationRepository()
        self.users = FakeUserRepository()
        self.deletion_requests = FakeDeletionRequestRepository()
        self.commits = 0
        self.rollbacks = 0

    def _stores(self) -> list[dict]:
        return [
            self.organizations._by_id,
            self.members._by_id,
            self.invitations._by_id,
            self.users._by_id,
            self.deletion_requests._by_id,
        ]

    def snapshot(self) -> list[dict]:
        return [copy.deepcopy(s) for s in self._stores()]

    def restore(self, snapshot: list[dict]) -> None:
        for store, saved in zip(self._stores(), snapshot, strict=True):
            store.clear()
            store.update(saved)

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory that commits on success and restores the snapshot on error."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        saved = uow.snapshot()
        try:
            yield uow
            await uow.commit()
        except BaseException:
            uow.restore(saved)
            await uow.rollback()
            raise

    return factory


class FakeClaimsPublisher:
    """Claims sink keeping the last published payload per user."""

    def __init__(self) -> None:
        self.claims: dict[str, dict[str, Any]] = {}
        self.fail_on_set = False

    async def get_claims(self, user_id: str) -> dict[str, Any] | None:
        return self.claims.get(user_id)

    async def set_claims(self, user_id: str, payload: dict[str, Any]) -> None:
        if self.fail_on_set:
            raise RuntimeError("claims sink unavailable")
        self.claims[user_id] = payload


class FakeEmailSender:
    """Records sent emails; fail=True makes every send raise."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = fail

    async def send_template(
        self,
        to: str,
        template_alias: str,
        template_data: dict[str, Any],
        metadata: dict[str, str] | None = None,
    ) -> None:
        if self.fail:
            raise RuntimeError("postmark down")
        self.sent.append(
            {"to": to, "template": template_alias, "data": template_data, "metadata": metadata}
        )


def make_member(
    organization_id: UUID,
    user_id: str,
    role: OrganizationRole | str = OrganizationRole.MEMBER,
    permissions: list[str] | None = None,
    brand_access: list[str] | None = None,
) -> OrganizationMember:
    return OrganizationMember(
        id=uuid4(),
        organization_id=organization_id,
        user_id=user_id,
        role=role,
        joined_at=datetime.now(UTC),
        permissions=permissions or [],
        brand_access=brand_access or [],
    )


def make_invitation(
    organization_id: UUID,
    email: str = "invitee@example.com",
    role: OrganizationRole = OrganizationRole.MEMBER,
    status: InvitationStatus = InvitationStatus.PENDING,
    expires_in: timedelta = timedelta(days=7),
    brand_access: list[str] | None = None,
    invited_by: str = "owner-1",
) -> Invitation:
    now = datetime.now(UTC)
    return Invitation(
        id=uuid4(),
        email=email,
        organization_id=organization_id,
        organization_name="Acme Events",
        role=role,
        token=InvitationToken.generate().value,
        status=status,
        invited_by=invited_by,
        invited_at=now,
        expires_at=now + expires_in,
        brand_access=brand_access or [],
        inviter_name="Olive Owner",
        inviter_email="owner@example.com",
    )


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(uow: FakeUnitOfWork):
    return make_uow_factory(uow)


@pytest.fixture
def organization(uow: FakeUnitOfWork) -> Organization:
    """Organization owned by owner-1 with an admin and a member."""
    org = Organization(
        id=uuid4(),
        name="Acme Events",
        type=OrganizationType.TEAM,
        billing_email="billing@acme.test",
        created_by="owner-1",
        created_at=datetime.now(UTC),
    )
    uow.organizations._by_id[org.id] = org
    for user_id, email, role in [
        ("owner-1", "owner@example.com", OrganizationRole.OWNER),
        ("admin-1", "admin@example.com", OrganizationRole.ADMIN),
        ("member-1", "member@example.com", OrganizationRole.MEMBER),
    ]:
        m = make_member(org.id, user_id, role)
        uow.members._by_id[m.id] = m
        uow.users.add(UserProfile(id=user_id, email=email, display_name=user_id.title()))
    return org


@pytest.fixture
def owner() -> Identity:
    return Identity(user_id="owner-1", email="owner@example.com", name="Olive Owner")


@pytest.fixture
def admin() -> Identity:
    return Identity(user_id="admin-1", email="admin@example.com", name="Adam Admin")


@pytest.fixture
def member() -> Identity:
    return Identity(user_id="member-1", email="member@example.com", name="Mia Member")


@pytest.fixture
def invitee() -> Identity:
    return Identity(user_id="invitee-1", email="Invitee@Example.com", name="Ivy Invitee")


@pytest.fixture
def claims_publisher() -> FakeClaimsPublisher:
    return FakeClaimsPublisher()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()
