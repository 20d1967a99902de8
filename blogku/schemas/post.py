"""
Post schemas for the blog content API.

Response models double as the cached representation, so a cached value is
validated with the same model that produced it.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from blogku.configs.settings import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH
from blogku.errors import InvalidInputError

PostTitle = Annotated[str, StringConstraints(strip_whitespace=True, max_length=MAX_TITLE_LENGTH)]
PostContent = Annotated[str, StringConstraints(max_length=MAX_CONTENT_LENGTH)]


class PostResponse(BaseModel):
    """Public view of a single post."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    slug: str
    image_path: str
    published_at: datetime


class PaginationMeta(BaseModel):
    """Pagination block of a post listing."""

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total_page: int = Field(ge=0, alias="totalPage")
    total_items: int = Field(ge=0, alias="totalItems")


class PostListResponse(BaseModel):
    """One page of the post listing with pagination metadata."""

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)

    total: int = Field(ge=0)
    blogs: list[PostResponse]
    meta: PaginationMeta


class PostUpdate(BaseModel):
    """Partial update of a post. Blank strings count as absent."""

    title: PostTitle | None = Field(default=None, examples=["A Better Title"])
    content: PostContent | None = Field(default=None)

    @model_validator(mode="after")
    def blank_to_none(self) -> "PostUpdate":
        if self.title is not None and not self.title.strip():
            self.title = None
        if self.content is not None and not self.content.strip():
            self.content = None
        return self

    @property
    def is_empty(self) -> bool:
        return self.title is None and self.content is None

    def require_changes(self) -> "PostUpdate":
        """
        Ensure at least one field carries a value.

        Raises:
            InvalidInputError: If both title and content are empty.
        """
        if self.is_empty:
            mssg = "At least one of title or content must be provided"
            raise InvalidInputError(mssg)
        return self


class CreatedPost(BaseModel):
    """Post body returned after creation."""

    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True)

    id: int
    title: str
    content: str
    slug: str
    image_url: str = Field(alias="imageUrl")


class PostCreatedResponse(BaseModel):
    message: str = "Blog created successfully"
    blog: CreatedPost


class PostMutationResponse(BaseModel):
    """Response of update and delete operations."""

    message: str
    slug: str
