"""Application ports - interfaces for external adapters."""

from brandstage.application.ports.claims_publisher import ClaimsPublisher
from brandstage.application.ports.email_sender import EmailSender
from brandstage.application.ports.identity_provider import Identity, IdentityProvider
from brandstage.application.ports.permission_checker import PermissionChecker
from brandstage.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "ClaimsPublisher",
    "EmailSender",
    "Identity",
    "IdentityProvider",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
