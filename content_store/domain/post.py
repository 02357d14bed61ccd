"""
Post Domain Models

Defines Post related Data Transfer Objects (DTOs).
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PostCreate(BaseModel):
    """Create or Update Post Request"""

    title: str = Field(..., min_length=1, description="Post Title")
    content: str = Field(..., min_length=1, description="Source Content")
    images: list[str] = Field(default_factory=list, description="Image URLs")
    slug: Optional[str] = Field(None, description="Slug, derived from title when omitted")

    @field_validator("images", mode="before")
    @classmethod
    def split_images(cls, v):
        # admin form posts a comma-separated string
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v


class PostModel(BaseModel):
    """Post Complete Model"""

    site: str
    slug: str
    title: str
    content: str
    images: list[str] = Field(default_factory=list)
    html: Optional[str] = None
    created_at: str
    updated_at: str


class PostSummary(BaseModel):
    """Post List Item"""

    slug: str
    title: str
    created_at: str
    updated_at: str
