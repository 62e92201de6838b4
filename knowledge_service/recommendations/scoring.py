"""
Relevance scoring primitives.

Pure functions with no engine state: a candidate's score against a context is
a category bonus plus a per-tag overlap weight, optionally nudged by a small
difficulty-progression bonus.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, Mapping, Tuple

from ..models import BlogPostReference, DifficultyLevel, ProjectReference, Theory, TheoryCategory


@dataclass(frozen=True, slots=True)
class RelevanceWeights:
    """Weights used by every scoring rule.

    `category` must exceed `tag` so that a category match dominates ties among
    weak tag overlaps, and `difficulty` must stay below `tag` so the
    progression bonus can reorder equal-overlap candidates but never outrank
    an extra shared tag.
    """

    category: float = 3.0
    tag: float = 1.0
    difficulty: float = 0.0

    def __post_init__(self) -> None:
        if self.tag <= 0:
            raise ValueError(f"Tag weight must be positive, got {self.tag}")
        if self.category <= self.tag:
            raise ValueError(
                f"Category weight ({self.category}) must be greater than tag weight ({self.tag})"
            )
        if not 0 <= self.difficulty < self.tag:
            raise ValueError(
                f"Difficulty weight must be in [0, {self.tag}), got {self.difficulty}"
            )


DEFAULT_WEIGHTS = RelevanceWeights()

# Theory category -> project category keywords (matched case-insensitively)
PROJECT_CATEGORY_KEYWORDS: Dict[TheoryCategory, Tuple[str, ...]] = {
    TheoryCategory.COGNITIVE_BIASES: ("marketing", "analytics"),
    TheoryCategory.PERSUASION_PRINCIPLES: ("marketing", "sales"),
    TheoryCategory.BEHAVIORAL_ECONOMICS: ("fintech", "ecommerce"),
    TheoryCategory.UX_PSYCHOLOGY: ("design", "frontend"),
    TheoryCategory.EMOTIONAL_TRIGGERS: ("social", "engagement"),
}

_DIFFICULTY_ORDER = {
    DifficultyLevel.BEGINNER: 1,
    DifficultyLevel.INTERMEDIATE: 2,
    DifficultyLevel.ADVANCED: 3,
}


def tag_overlap(first: AbstractSet[str], second: AbstractSet[str]) -> int:
    """Number of identical tags present in both sets (case-sensitive)."""
    return len(first & second)


def difficulty_progression(source: Theory, candidate: Theory) -> float:
    """Prefer candidates of the same or slightly higher difficulty."""
    delta = (
        _DIFFICULTY_ORDER[candidate.metadata.difficulty]
        - _DIFFICULTY_ORDER[source.metadata.difficulty]
    )
    if delta == 0:
        return 1.0
    if delta == 1:
        return 0.8
    if delta == -1:
        return 0.6
    return 0.3


def score_theory(source: Theory, candidate: Theory, weights: RelevanceWeights = DEFAULT_WEIGHTS) -> float:
    """Score `candidate` relative to `source`; higher means more relevant."""
    score = 0.0
    if candidate.category == source.category:
        score += weights.category
    score += weights.tag * tag_overlap(source.tag_set, candidate.tag_set)
    if weights.difficulty:
        score += weights.difficulty * difficulty_progression(source, candidate)
    return score


def score_theory_for_categories(
    candidate: Theory,
    categories: AbstractSet[str],
    tag_pool: AbstractSet[str],
    weights: RelevanceWeights = DEFAULT_WEIGHTS,
) -> float:
    """Score a theory against a category context.

    `tag_pool` holds the tags of the other theories in the requested
    categories; the candidate's own category is the best match it can have.
    """
    score = 0.0
    if candidate.category.value in categories:
        score += weights.category
    score += weights.tag * tag_overlap(candidate.tag_set, tag_pool)
    return score


def score_blog_post(
    post: BlogPostReference,
    tag_pool: AbstractSet[str],
    weights: RelevanceWeights = DEFAULT_WEIGHTS,
) -> float:
    return weights.tag * tag_overlap(post.tag_set, tag_pool)


def project_keyword_counts(categories: Iterable[str]) -> Counter:
    """Count, per project keyword, how many requested categories map to it."""
    counts: Counter = Counter()
    for category in categories:
        try:
            keywords = PROJECT_CATEGORY_KEYWORDS[TheoryCategory(category)]
        except ValueError:
            # Unknown category: contributes no keywords
            continue
        counts.update(keywords)
    return counts


def score_project(
    project: ProjectReference,
    keyword_counts: Mapping[str, int],
    weights: RelevanceWeights = DEFAULT_WEIGHTS,
) -> float:
    return weights.tag * keyword_counts.get(project.category.strip().lower(), 0)
