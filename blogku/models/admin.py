"""Admin database model using SQLModel."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from blogku.utils.helpers import utc_now


class AdminDB(SQLModel, table=True):
    """Administrator account. Username and email are each unique."""

    __tablename__ = cast("declared_attr[str]", "admins")

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(sa_column=Column(String(50), unique=True, nullable=False, index=True))
    email: str = Field(sa_column=Column(String(255), unique=True, nullable=False, index=True))
    password: str = Field(sa_column=Column(String(255), nullable=False), description="Password hash")
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
