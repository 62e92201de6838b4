"""
Models package for knowledge hub content.

This package contains the Pydantic models for theories, secondary content
references, user progress and recommendation output.
"""

from .theory_models import (
    DifficultyLevel,
    RelevanceType,
    Theory,
    TheoryCategory,
    TheoryMetadata,
)

from .reference_models import (
    BlogPostReference,
    ProjectReference,
)

from .progress_models import UserProgressView

from .recommendation_models import (
    BlogPostRecommendation,
    ContentType,
    CrossLink,
    ProjectRecommendation,
    RecommendationItem,
    TheoryRecommendation,
)

__all__ = [
    # Theory models
    "DifficultyLevel",
    "RelevanceType",
    "Theory",
    "TheoryCategory",
    "TheoryMetadata",

    # Secondary content
    "BlogPostReference",
    "ProjectReference",

    # Progress
    "UserProgressView",

    # Recommendation output
    "BlogPostRecommendation",
    "ContentType",
    "CrossLink",
    "ProjectRecommendation",
    "RecommendationItem",
    "TheoryRecommendation",
]
