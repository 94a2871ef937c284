"""Domain exceptions.

Every error carries a stable ``kind`` so the HTTP boundary can turn it into a
structured response without inspecting messages.
"""

from uuid import UUID


class BrandStageError(Exception):
    """Base exception for brandstage."""

    kind = "error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class AuthenticationError(BrandStageError):
    """Missing, invalid or expired identity token."""

    kind = "authentication"


class AuthorizationError(BrandStageError):
    """Authenticated, but lacking the required permission or brand access."""

    kind = "authorization"


class NotFound(BrandStageError):
    """Requested resource was not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str | UUID) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = str(identifier)


class ConflictError(BrandStageError):
    """Duplicate pending invitation, existing membership or request in flight."""

    kind = "conflict"

    def __init__(self, message: str, existing_id: UUID | None = None) -> None:
        super().__init__(message)
        self.existing_id = existing_id


class ValidationError(BrandStageError):
    """Validation failed for input data."""

    kind = "validation"


class StateError(BrandStageError):
    """Invitation is no longer pending (or has expired)."""

    kind = "state"


class SizeLimitError(BrandStageError):
    """Claims payload exceeds the hard byte cap. Handled internally by fallback."""

    kind = "size_limit"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Claims payload is {size} bytes, limit is {limit}")
        self.size = size
        self.limit = limit
