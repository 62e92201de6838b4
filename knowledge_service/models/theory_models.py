"""
Theory-related data models.

This module contains Pydantic models for knowledge hub theories and the
enumerations used to classify them.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class TheoryCategory(str, Enum):
    """Subject area of a theory."""
    COGNITIVE_BIASES = "cognitive-biases"
    PERSUASION_PRINCIPLES = "persuasion-principles"
    BEHAVIORAL_ECONOMICS = "behavioral-economics"
    UX_PSYCHOLOGY = "ux-psychology"
    EMOTIONAL_TRIGGERS = "emotional-triggers"


class DifficultyLevel(str, Enum):
    """Reading difficulty of a theory."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class RelevanceType(str, Enum):
    """Business area a theory applies to."""
    MARKETING = "marketing"
    UX = "ux"
    SALES = "sales"


class TheoryMetadata(BaseModel):
    """Classification metadata attached to a theory."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    difficulty: DifficultyLevel = Field(default=DifficultyLevel.BEGINNER, description="Difficulty level")
    relevance: Tuple[RelevanceType, ...] = Field(default_factory=tuple, description="Relevant business areas")
    read_time: int = Field(default=0, ge=0, alias="readTime", description="Estimated read time in minutes")
    tags: Tuple[str, ...] = Field(default_factory=tuple, description="Free-text tags used for similarity")


class Theory(BaseModel):
    """An atomic piece of educational content."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Stable theory identifier")
    title: str = Field(description="Display title")
    category: TheoryCategory = Field(description="Theory category")
    summary: str = Field(default="", description="Short summary (50-80 words)")
    metadata: TheoryMetadata = Field(default_factory=TheoryMetadata, description="Classification metadata")
    is_premium: bool = Field(default=False, alias="isPremium", description="Premium-only content")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @property
    def tag_set(self) -> frozenset:
        """Tags as a set, for overlap computations."""
        return frozenset(self.metadata.tags)
