"""
Recommendation engine package for the knowledge hub.

Provides the relevance scorer, the catalogue-backed engine, cross-link
construction and the engine registry, reusable by the web layer or any batch
tooling without creating Flask dependencies.
"""

from .engine import (
    CatalogueSnapshot,
    KnowledgeHubRecommendationEngine,
)
from .links import (
    BLOG_POST_URL_TEMPLATE,
    PROJECTS_URL,
    THEORY_URL_TEMPLATE,
    build_cross_link,
    content_url,
    truncate_description,
)
from .registry import (
    EngineRegistry,
    default_registry,
    get_engine,
    initialize_engine,
)
from .scoring import (
    DEFAULT_WEIGHTS,
    PROJECT_CATEGORY_KEYWORDS,
    RelevanceWeights,
    score_theory,
)

__all__ = [
    "BLOG_POST_URL_TEMPLATE",
    "CatalogueSnapshot",
    "DEFAULT_WEIGHTS",
    "EngineRegistry",
    "KnowledgeHubRecommendationEngine",
    "PROJECTS_URL",
    "PROJECT_CATEGORY_KEYWORDS",
    "RelevanceWeights",
    "THEORY_URL_TEMPLATE",
    "build_cross_link",
    "content_url",
    "default_registry",
    "get_engine",
    "initialize_engine",
    "score_theory",
    "truncate_description",
]
