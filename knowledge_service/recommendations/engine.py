"""
Knowledge hub recommendation engine.

This module intentionally lives inside knowledge_service/ so it can be shared
by the web application, catalogue tooling, or any future batch jobs without
introducing Flask dependencies.

The engine holds an immutable `CatalogueSnapshot`. Updates swap in a new
snapshot and every query reads the snapshot reference exactly once, so a query
in progress never observes a half-applied update.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence, Set, Tuple, Type, TypeVar

from ..models import (
    BlogPostRecommendation,
    BlogPostReference,
    CrossLink,
    ProjectRecommendation,
    ProjectReference,
    RecommendationItem,
    Theory,
    TheoryCategory,
    TheoryRecommendation,
    UserProgressView,
)
from .links import build_cross_link
from .scoring import (
    DEFAULT_WEIGHTS,
    PROJECT_CATEGORY_KEYWORDS,
    RelevanceWeights,
    project_keyword_counts,
    score_blog_post,
    score_project,
    score_theory,
    score_theory_for_categories,
    tag_overlap,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RELATED_LIMIT = 5
DEFAULT_RECOMMENDATION_LIMIT = 10
CROSS_LINK_THEORY_LIMIT = 3
CROSS_LINK_BLOG_POST_LIMIT = 2
CROSS_LINK_PROJECT_LIMIT = 2


# ---------------------------------------------------------------------------
# Catalogue snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CatalogueSnapshot:
    """Immutable view of the three content collections."""

    theories: Tuple[Theory, ...] = field(default_factory=tuple)
    blog_posts: Tuple[BlogPostReference, ...] = field(default_factory=tuple)
    projects: Tuple[ProjectReference, ...] = field(default_factory=tuple)


def _as_catalogue(items: Any, model: Type[T], name: str) -> Tuple[T, ...]:
    """Copy `items` into a tuple, rejecting anything that is not a collection of `model`."""
    if items is None or isinstance(items, (str, bytes, bytearray, Mapping)) or not isinstance(items, Iterable):
        raise TypeError(
            f"{name} must be a collection of {model.__name__}, got {type(items).__name__}"
        )
    snapshot = tuple(items)
    for index, item in enumerate(snapshot):
        if not isinstance(item, model):
            raise TypeError(
                f"{name}[{index}] must be a {model.__name__}, got {type(item).__name__}"
            )
    return snapshot


def _check_unique_ids(theories: Sequence[Theory]) -> None:
    seen: Set[str] = set()
    for theory in theories:
        if theory.id in seen:
            raise ValueError(f"Duplicate theory id in catalogue: {theory.id}")
        seen.add(theory.id)


def _check_limit(limit: Any) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"limit must be an integer, got {type(limit).__name__}")
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")
    return limit


def _normalize_categories(categories: Iterable[Any]) -> Set[str]:
    if categories is None or isinstance(categories, (str, bytes)):
        # A bare string names a single category
        return {categories} if isinstance(categories, str) else set()
    return {c.value if isinstance(c, TheoryCategory) else str(c) for c in categories}


def _rank(scored: List[Tuple[float, T]]) -> List[T]:
    """Sort by score descending; equal scores keep their input order."""
    return [item for _, item in sorted(scored, key=lambda pair: pair[0], reverse=True)]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class KnowledgeHubRecommendationEngine:
    """Ranks theories, blog posts and projects for a viewing context."""

    def __init__(
        self,
        theories: Optional[Iterable[Theory]] = None,
        blog_posts: Optional[Iterable[BlogPostReference]] = None,
        projects: Optional[Iterable[ProjectReference]] = None,
        weights: Optional[RelevanceWeights] = None,
    ):
        self.weights = weights or DEFAULT_WEIGHTS
        self._lock = threading.Lock()
        theory_snapshot = _as_catalogue(theories if theories is not None else (), Theory, "theories")
        _check_unique_ids(theory_snapshot)
        self._catalogue = CatalogueSnapshot(
            theories=theory_snapshot,
            blog_posts=_as_catalogue(
                blog_posts if blog_posts is not None else (), BlogPostReference, "blog_posts"
            ),
            projects=_as_catalogue(
                projects if projects is not None else (), ProjectReference, "projects"
            ),
        )

    # Catalogue access ------------------------------------------------------

    @property
    def catalogue(self) -> CatalogueSnapshot:
        return self._catalogue

    @property
    def theories(self) -> Tuple[Theory, ...]:
        return self._catalogue.theories

    @property
    def blog_posts(self) -> Tuple[BlogPostReference, ...]:
        return self._catalogue.blog_posts

    @property
    def projects(self) -> Tuple[ProjectReference, ...]:
        return self._catalogue.projects

    def find_theory(self, theory_id: str) -> Optional[Theory]:
        for theory in self._catalogue.theories:
            if theory.id == theory_id:
                return theory
        return None

    def update_theories(self, theories: Iterable[Theory]) -> None:
        """Replace the theory catalogue wholesale."""
        snapshot = _as_catalogue(theories, Theory, "theories")
        _check_unique_ids(snapshot)
        self._swap(theories=snapshot)
        logger.debug(f"Theory catalogue replaced: {len(snapshot)} theories")

    def update_blog_posts(self, blog_posts: Iterable[BlogPostReference]) -> None:
        """Replace the blog post catalogue wholesale."""
        snapshot = _as_catalogue(blog_posts, BlogPostReference, "blog_posts")
        self._swap(blog_posts=snapshot)
        logger.debug(f"Blog post catalogue replaced: {len(snapshot)} posts")

    def update_projects(self, projects: Iterable[ProjectReference]) -> None:
        """Replace the project catalogue wholesale."""
        snapshot = _as_catalogue(projects, ProjectReference, "projects")
        self._swap(projects=snapshot)
        logger.debug(f"Project catalogue replaced: {len(snapshot)} projects")

    def update_catalogue(
        self,
        theories: Iterable[Theory],
        blog_posts: Optional[Iterable[BlogPostReference]] = None,
        projects: Optional[Iterable[ProjectReference]] = None,
    ) -> None:
        """Replace several collections in one swap.

        Every given collection is validated before anything is installed, so
        a rejected argument leaves the whole catalogue as it was. Collections
        passed as None keep their current contents.
        """
        changes = {"theories": _as_catalogue(theories, Theory, "theories")}
        _check_unique_ids(changes["theories"])
        if blog_posts is not None:
            changes["blog_posts"] = _as_catalogue(blog_posts, BlogPostReference, "blog_posts")
        if projects is not None:
            changes["projects"] = _as_catalogue(projects, ProjectReference, "projects")
        self._swap(**changes)
        sizes = {name: len(snapshot) for name, snapshot in changes.items()}
        logger.debug(f"Catalogue replaced: {sizes}")

    def _swap(self, **changes: Tuple[Any, ...]) -> None:
        # Writers serialize here; readers take self._catalogue without the lock
        with self._lock:
            self._catalogue = replace(self._catalogue, **changes)

    # Queries ---------------------------------------------------------------

    def get_related_theories(
        self,
        source: Theory,
        progress: Optional[UserProgressView] = None,
        limit: int = DEFAULT_RELATED_LIMIT,
    ) -> List[Theory]:
        """Theories most related to `source`, excluding itself and anything already read."""
        _check_limit(limit)
        read = progress.read_theories if progress is not None else frozenset()
        return self._related_theories(self._catalogue, source, read, limit)

    def get_content_recommendations(
        self,
        categories: Iterable[Any],
        progress: Optional[UserProgressView] = None,
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
    ) -> List[RecommendationItem]:
        """Mixed theory, blog post and project recommendations for a set of categories.

        Whenever an unread theory exists in the requested categories, at least
        one theory is returned: if secondary content crowds theories out of the
        top `limit`, the best theory takes the last slot.
        """
        _check_limit(limit)
        if limit == 0:
            return []

        catalogue = self._catalogue
        wanted = _normalize_categories(categories)
        read = progress.read_theories if progress is not None else frozenset()

        category_theories = [t for t in catalogue.theories if t.category.value in wanted]
        tag_counts: Counter = Counter()
        for theory in category_theories:
            tag_counts.update(theory.tag_set)
        category_tags = frozenset(tag_counts)

        theory_items: List[Tuple[float, RecommendationItem]] = []
        for theory in category_theories:
            if theory.id in read:
                continue
            other_tags = frozenset(tag_counts - Counter(theory.tag_set))
            score = score_theory_for_categories(theory, wanted, other_tags, self.weights)
            theory_items.append((score, TheoryRecommendation(payload=theory, score=score)))

        secondary_items: List[Tuple[float, RecommendationItem]] = []
        for post in catalogue.blog_posts:
            if not tag_overlap(post.tag_set, category_tags):
                continue
            score = score_blog_post(post, category_tags, self.weights)
            secondary_items.append((score, BlogPostRecommendation(payload=post, score=score)))

        keyword_counts = project_keyword_counts(wanted)
        for project in catalogue.projects:
            score = score_project(project, keyword_counts, self.weights)
            if score <= 0:
                continue
            secondary_items.append((score, ProjectRecommendation(payload=project, score=score)))

        ranked = _rank(theory_items + secondary_items)[:limit]

        if theory_items and not any(isinstance(item, TheoryRecommendation) for item in ranked):
            best_theory = _rank(theory_items)[0]
            ranked[-1] = best_theory

        logger.debug(
            f"Content recommendations for {sorted(wanted)}: "
            f"{len(theory_items)} theories, {len(secondary_items)} secondary, returning {len(ranked)}"
        )
        return ranked

    def get_cross_links(
        self,
        theory: Theory,
        theory_limit: int = CROSS_LINK_THEORY_LIMIT,
        blog_post_limit: int = CROSS_LINK_BLOG_POST_LIMIT,
        project_limit: int = CROSS_LINK_PROJECT_LIMIT,
        description_length: Optional[int] = None,
    ) -> List[CrossLink]:
        """Non-personalized "see also" links for a theory, theories first."""
        for limit in (theory_limit, blog_post_limit, project_limit):
            _check_limit(limit)

        catalogue = self._catalogue
        related = self._related_theories(catalogue, theory, frozenset(), theory_limit)

        own_tags = theory.tag_set
        blog_posts = _rank([
            (score_blog_post(post, own_tags, self.weights), post)
            for post in catalogue.blog_posts
            if tag_overlap(post.tag_set, own_tags)
        ])[:blog_post_limit]

        keywords = PROJECT_CATEGORY_KEYWORDS.get(theory.category, ())
        projects = [
            project for project in catalogue.projects
            if project.category.strip().lower() in keywords
        ][:project_limit]

        return [
            build_cross_link(item, description_length)
            for item in [*related, *blog_posts, *projects]
        ]

    # Internals -------------------------------------------------------------

    def _related_theories(
        self,
        catalogue: CatalogueSnapshot,
        source: Theory,
        read: frozenset,
        limit: int,
    ) -> List[Theory]:
        if limit == 0:
            return []
        scored = [
            (score_theory(source, candidate, self.weights), candidate)
            for candidate in catalogue.theories
            if candidate.id != source.id and candidate.id not in read
        ]
        return _rank(scored)[:limit]
