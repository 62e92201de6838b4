"""
Knowledge hub service.

Wraps the recommendation engine for the web layer: applies configured limits,
derives personalization from user progress and reloads catalogues. The engine
is resolved through the registry on every call so a re-initialized engine is
picked up immediately.
"""
import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from config_manager import RecommendationConfig
from knowledge_service.catalog_loader import load_catalog
from knowledge_service.models import (
    BlogPostReference,
    CrossLink,
    ProjectReference,
    RecommendationItem,
    Theory,
    TheoryCategory,
    UserProgressView,
)
from knowledge_service.recommendations import (
    EngineRegistry,
    KnowledgeHubRecommendationEngine,
    RelevanceWeights,
)

logger = logging.getLogger(__name__)

TRENDING_LIMIT = 5


def build_weights(settings: RecommendationConfig) -> RelevanceWeights:
    """Scoring weights from the recommendation config."""
    return RelevanceWeights(
        category=settings.category_weight,
        tag=settings.tag_weight,
        difficulty=settings.difficulty_weight,
    )


class KnowledgeHubService:
    """Service for theory lookup, recommendations and cross-links."""

    def __init__(
        self,
        registry: EngineRegistry,
        settings: RecommendationConfig,
        catalog_dir: Optional[Path] = None,
    ):
        """
        Initialize KnowledgeHubService.

        Args:
            registry: Registry holding the current recommendation engine
            settings: Recommendation limits and weights
            catalog_dir: Directory the catalogue is reloaded from
        """
        self.registry = registry
        self.settings = settings
        self.catalog_dir = catalog_dir

    @property
    def engine(self) -> KnowledgeHubRecommendationEngine:
        return self.registry.get()

    def resolve_limit(self, limit: Optional[int], default: int) -> int:
        """Apply the default and cap at the configured maximum."""
        if limit is None:
            return default
        if limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")
        return min(limit, self.settings.max_limit)

    # Theories ------------------------------------------------------------------

    def get_theory(self, theory_id: str) -> Optional[Theory]:
        return self.engine.find_theory(theory_id)

    def list_theories(self, category: Optional[str] = None) -> List[Theory]:
        theories = self.engine.theories
        if category is None:
            return list(theories)
        return [t for t in theories if t.category.value == category]

    def related_theories(
        self,
        theory: Theory,
        progress: Optional[UserProgressView] = None,
        limit: Optional[int] = None,
    ) -> List[Theory]:
        limit = self.resolve_limit(limit, self.settings.related_limit)
        return self.engine.get_related_theories(theory, progress, limit)

    def cross_links(self, theory: Theory) -> List[CrossLink]:
        return self.engine.get_cross_links(
            theory,
            theory_limit=self.settings.cross_link_theories,
            blog_post_limit=self.settings.cross_link_blog_posts,
            project_limit=self.settings.cross_link_projects,
            description_length=self.settings.description_length,
        )

    # Recommendations -----------------------------------------------------------

    def content_recommendations(
        self,
        categories: Iterable[str],
        progress: Optional[UserProgressView] = None,
        limit: Optional[int] = None,
    ) -> List[RecommendationItem]:
        limit = self.resolve_limit(limit, self.settings.default_limit)
        return self.engine.get_content_recommendations(categories, progress, limit)

    def preferred_categories(self, progress: UserProgressView) -> List[TheoryCategory]:
        """
        Rank the categories a user has explored by how often they appear.

        Ties keep first-seen order. With nothing explored, every category is
        returned so the user still gets a broad selection.
        """
        counts = Counter(progress.categories_explored)
        if not counts:
            return list(TheoryCategory)
        ranked = sorted(counts, key=lambda category: counts[category], reverse=True)
        return ranked[: self.settings.personalized_categories]

    def personalized_recommendations(
        self,
        progress: UserProgressView,
        limit: Optional[int] = None,
    ) -> List[RecommendationItem]:
        categories = self.preferred_categories(progress)
        logger.debug(f"Personalized recommendations for categories: {[c.value for c in categories]}")
        return self.content_recommendations(categories, progress, limit)

    def trending_content(self, limit: Optional[int] = None) -> List[RecommendationItem]:
        """Unpersonalized recommendations across every category."""
        limit = self.resolve_limit(limit, TRENDING_LIMIT)
        return self.engine.get_content_recommendations(list(TheoryCategory), None, limit)

    # Catalogue -----------------------------------------------------------------

    def update_catalog(
        self,
        theories: Iterable[Theory],
        blog_posts: Optional[Iterable[BlogPostReference]] = None,
        projects: Optional[Iterable[ProjectReference]] = None,
    ) -> None:
        """Replace collections on the current engine; absent ones are left as they are."""
        self.engine.update_catalogue(theories, blog_posts, projects)

    def reload_catalog(self) -> Dict[str, int]:
        """Re-read the catalogue directory and install a fresh engine."""
        if self.catalog_dir is None:
            raise RuntimeError("No catalogue directory configured")
        catalog = load_catalog(self.catalog_dir)
        self.registry.initialize(
            catalog.theories,
            catalog.blog_posts,
            catalog.projects,
            weights=build_weights(self.settings),
        )
        theories, blog_posts, projects = catalog.counts()
        return {"theories": theories, "blog_posts": blog_posts, "projects": projects}
