"""Post database model using SQLModel."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime, Index
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String, Text

from blogku.configs.settings import MAX_TITLE_LENGTH
from blogku.utils.helpers import utc_now


class PostDB(SQLModel, table=True):
    """
    Blog post row.

    ``slug`` carries the unique constraint that arbitrates concurrent
    creates racing for the same slug.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (Index("ix_posts_published_at_id", "published_at", "id"),)

    id: int | None = Field(default=None, primary_key=True, description="Post ID")
    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Post title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body",
    )
    slug: str = Field(
        sa_column=Column(String(300), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    image_path: str = Field(
        sa_column=Column(String(350), nullable=False),
        description="Stored image file name",
    )
    published_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
