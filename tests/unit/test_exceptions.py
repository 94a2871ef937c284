"""Unit tests for domain exceptions."""

from uuid import uuid4

import pytest

from brandstage.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BrandStageError,
    ConflictError,
    NotFound,
    SizeLimitError,
    StateError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc_type",
    [
        AuthenticationError,
        AuthorizationError,
        NotFound,
        ConflictError,
        ValidationError,
        StateError,
        SizeLimitError,
    ],
)
def test_errors_inherit_brandstage_error(exc_type) -> None:
    """Every domain error is a BrandStageError."""
    assert issubclass(exc_type, BrandStageError)


def test_kinds_are_distinct() -> None:
    """Each error class carries its own stable kind."""
    kinds = [
        AuthenticationError.kind,
        AuthorizationError.kind,
        NotFound.kind,
        ConflictError.kind,
        ValidationError.kind,
        StateError.kind,
        SizeLimitError.kind,
    ]
    assert len(set(kinds)) == len(kinds)


def test_not_found_message_and_fields() -> None:
    """NotFound names the resource and identifier."""
    e = NotFound("Invitation", "abc")
    assert e.message == "Invitation not found: abc"
    assert e.resource == "Invitation"
    assert e.identifier == "abc"


def test_conflict_carries_existing_id() -> None:
    """ConflictError exposes the id of the conflicting record."""
    existing = uuid4()
    e = ConflictError("duplicate", existing_id=existing)
    assert e.existing_id == existing
    assert ConflictError("duplicate").existing_id is None


def test_size_limit_fields() -> None:
    """SizeLimitError reports size and limit."""
    e = SizeLimitError(1200, 1000)
    assert (e.size, e.limit) == (1200, 1000)
    assert "1200" in e.message


def test_exception_message_preserved() -> None:
    """Exception message is preserved when raised."""
    msg = "Invitation has expired"
    with pytest.raises(StateError, match=msg):
        raise StateError(msg)
