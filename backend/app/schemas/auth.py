from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email

from app.schemas.user import UserOut

# Required fields are optional at the schema level on purpose: blank/missing
# values must come back as a 400 "All fields are required", not a 422.
_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterIn(BaseModel):
    full_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)
    profile_image_url: str | None = Field(default=None, max_length=1024)

    model_config = _camel

    @field_validator("email")
    @classmethod
    def email_must_be_well_formed(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return v
        validate_email(v.strip())
        return v.strip()


class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None

    model_config = _camel


class AuthOut(BaseModel):
    id: int
    user: UserOut
    token: str


class ErrorOut(BaseModel):
    message: str
    error: str | None = None
