"""
Output models produced by the recommendation engine.

`RecommendationItem` is a discriminated union over the three content kinds;
`CrossLink` is the flat, URL-annotated form used for "see also" lists.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .reference_models import BlogPostReference, ProjectReference
from .theory_models import Theory


class ContentType(str, Enum):
    """Kinds of content the engine can recommend."""
    THEORY = "theory"
    BLOG_POST = "blog-post"
    PROJECT = "project"


class TheoryRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["theory"] = "theory"
    payload: Theory
    score: float = 0.0

    @property
    def title(self) -> str:
        return self.payload.title


class BlogPostRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["blog-post"] = "blog-post"
    payload: BlogPostReference
    score: float = 0.0

    @property
    def title(self) -> str:
        return self.payload.title


class ProjectRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["project"] = "project"
    payload: ProjectReference
    score: float = 0.0

    @property
    def title(self) -> str:
        return self.payload.title


RecommendationItem = Annotated[
    Union[TheoryRecommendation, BlogPostRecommendation, ProjectRecommendation],
    Field(discriminator="kind"),
]


class CrossLink(BaseModel):
    """Navigable reference from one theory to related content of any kind."""
    model_config = ConfigDict(frozen=True)

    type: ContentType = Field(description="Kind of the linked content")
    id: str = Field(description="Identifier of the linked content")
    title: str = Field(description="Display title")
    url: str = Field(min_length=1, description="Navigation target")
    description: Optional[str] = Field(default=None, description="Short description for display")
