"""Admin account and authentication schemas."""

from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    SecretStr,
    StringConstraints,
)

Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$"),
]


class AdminLogin(BaseModel):
    """Login payload. ``email`` accepts either an email or a username."""

    email: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)] = Field(
        examples=["admin@example.com"],
    )
    password: SecretStr = Field(min_length=1)


class AdminCreate(BaseModel):
    username: Username = Field(examples=["editor"])
    email: EmailStr = Field(examples=["editor@example.com"])
    password: SecretStr = Field(min_length=8, max_length=128)


class AdminResponse(BaseModel):
    """Public admin fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class LoginResponse(AdminResponse):
    token: str


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    sub: int
    role: str
    jti: str
