"""Request schemas - validated at the HTTP boundary before reaching use cases."""

from typing import TypeVar
from uuid import UUID

import falcon.asgi
from pydantic import BaseModel, ConfigDict, Field, field_validator

from brandstage.domain.value_objects import OrganizationRole, OrganizationType, normalize_email

T = TypeVar("T", bound=BaseModel)


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class CreateOrganizationRequest(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    type: OrganizationType
    billing_email: str = Field(min_length=3, max_length=254)

    @field_validator("billing_email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = normalize_email(v)
        if "@" not in v:
            raise ValueError("must be an email address")
        return v


class InitiateDeletionRequest(RequestModel):
    confirmation_name: str = Field(min_length=1)


class DeletionTokenRequest(RequestModel):
    token: str = Field(min_length=1, max_length=128)


class CreateInvitationRequest(RequestModel):
    email: str = Field(min_length=3, max_length=254)
    role: OrganizationRole
    brand_access: list[str] = Field(default_factory=list)
    auto_grant_new_brands: bool = False

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = normalize_email(v)
        if "@" not in v:
            raise ValueError("must be an email address")
        return v


class AcceptInvitationsRequest(RequestModel):
    invitation_ids: list[UUID] = Field(min_length=1)


class UpdateMemberRequest(RequestModel):
    role: OrganizationRole | None = None
    brand_access: list[str] | None = None
    auto_grant_new_brands: bool | None = None


async def parse_body(req: falcon.asgi.Request, model: type[T]) -> T:
    """Validate the JSON body; pydantic errors reach the 400 handler."""
    media = await req.get_media(default_when_empty={})
    return model.model_validate(media)
