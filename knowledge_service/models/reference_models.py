"""
Secondary content references: blog posts and past projects.
"""

from datetime import date
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class BlogPostReference(BaseModel):
    """Reference to a blog post that can be recommended next to theories."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Blog post identifier")
    title: str = Field(description="Blog post title")
    slug: str = Field(min_length=1, description="URL slug, used for /blog/{slug}")
    tags: Tuple[str, ...] = Field(default_factory=tuple, description="Blog post tags")
    excerpt: str = Field(default="", description="Short excerpt for display")
    published_at: Optional[date] = Field(default=None, alias="publishedAt")
    read_time: int = Field(default=0, ge=0, alias="readTime")

    @property
    def tag_set(self) -> frozenset:
        return frozenset(self.tags)


class ProjectReference(BaseModel):
    """Reference to a past build project."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Project identifier")
    title: str = Field(description="Project title")
    description: str = Field(default="", description="Project description")
    category: str = Field(default="", description="Free-text project category (e.g. 'marketing')")
    technologies: Tuple[str, ...] = Field(default_factory=tuple)
    completed_at: Optional[date] = Field(default=None, alias="completedAt")
    github_url: Optional[str] = Field(default=None, alias="githubUrl")
    live_url: Optional[str] = Field(default=None, alias="liveUrl")
