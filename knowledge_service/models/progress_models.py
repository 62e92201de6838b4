"""
User progress view consumed by the recommendation engine.

Only the fields the engine reads are modelled here; the full progress document
lives in the persistence layer.
"""

from typing import FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .theory_models import TheoryCategory


class UserProgressView(BaseModel):
    """Read-only slice of a user's reading progress."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    read_theories: FrozenSet[str] = Field(
        default_factory=frozenset, alias="readTheories",
        description="Theory ids already read; never re-recommended"
    )
    bookmarked_theories: FrozenSet[str] = Field(
        default_factory=frozenset, alias="bookmarkedTheories",
        description="Bookmarked theory ids (informational only)"
    )
    categories_explored: Tuple[TheoryCategory, ...] = Field(
        default_factory=tuple, alias="categoriesExplored",
        description="Categories the user has browsed, used for personalization"
    )

    def has_read(self, theory_id: str) -> bool:
        return theory_id in self.read_theories
