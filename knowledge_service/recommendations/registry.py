"""
Engine registry.

An `EngineRegistry` holds "the current" recommendation engine. The web layer
owns one and receives it by injection; code that cannot thread a registry
through its call graph uses the module-level `get_engine()` /
`initialize_engine()` pair backed by `default_registry`.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from ..models import BlogPostReference, ProjectReference, Theory
from .engine import KnowledgeHubRecommendationEngine
from .scoring import RelevanceWeights

logger = logging.getLogger(__name__)


class EngineRegistry:
    """Thread-safe holder of a single engine instance."""

    def __init__(self, engine: Optional[KnowledgeHubRecommendationEngine] = None):
        self._engine = engine
        self._lock = threading.Lock()

    def get(self) -> KnowledgeHubRecommendationEngine:
        """Return the current engine, creating an empty one on first use."""
        with self._lock:
            if self._engine is None:
                self._engine = KnowledgeHubRecommendationEngine()
                logger.debug("Created empty recommendation engine on first access")
            return self._engine

    def set(self, engine: KnowledgeHubRecommendationEngine) -> KnowledgeHubRecommendationEngine:
        """Replace the current engine wholesale."""
        if not isinstance(engine, KnowledgeHubRecommendationEngine):
            raise TypeError(
                f"engine must be a KnowledgeHubRecommendationEngine, got {type(engine).__name__}"
            )
        with self._lock:
            self._engine = engine
        return engine

    def initialize(
        self,
        theories: Iterable[Theory],
        blog_posts: Optional[Iterable[BlogPostReference]] = None,
        projects: Optional[Iterable[ProjectReference]] = None,
        weights: Optional[RelevanceWeights] = None,
    ) -> KnowledgeHubRecommendationEngine:
        """Build a brand-new engine from the given catalogues and make it current."""
        # Construct fully before publishing
        engine = KnowledgeHubRecommendationEngine(theories, blog_posts, projects, weights=weights)
        self.set(engine)
        catalogue = engine.catalogue
        logger.info(
            f"Recommendation engine initialized: {len(catalogue.theories)} theories, "
            f"{len(catalogue.blog_posts)} blog posts, {len(catalogue.projects)} projects"
        )
        return engine

    def reset(self) -> None:
        """Drop the current engine; the next `get()` creates an empty one."""
        with self._lock:
            self._engine = None


# Global registry instance
default_registry = EngineRegistry()


def get_engine() -> KnowledgeHubRecommendationEngine:
    """Get the process-wide recommendation engine."""
    return default_registry.get()


def initialize_engine(
    theories: Iterable[Theory],
    blog_posts: Optional[Iterable[BlogPostReference]] = None,
    projects: Optional[Iterable[ProjectReference]] = None,
    weights: Optional[RelevanceWeights] = None,
) -> KnowledgeHubRecommendationEngine:
    """Replace the process-wide recommendation engine and return the new one."""
    return default_registry.initialize(theories, blog_posts, projects, weights=weights)
