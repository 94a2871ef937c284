"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from brandstage.application.ports.repositories import (
    DeletionRequestRepository,
    InvitationRepository,
    MemberRepository,
    OrganizationRepository,
    UserRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def organizations(self) -> OrganizationRepository: ...

    @property
    def members(self) -> MemberRepository: ...

    @property
    def invitations(self) -> InvitationRepository: ...

    @property
    def users(self) -> UserRepository: ...

    @property
    def deletion_requests(self) -> DeletionRequestRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
