# Knowledge service package: content models, catalogue loading and recommendations

from .catalog_loader import (
    Catalog,
    CatalogLoadError,
    load_catalog,
    load_collection,
    save_collection,
)
from .recommendations import (
    EngineRegistry,
    KnowledgeHubRecommendationEngine,
    RelevanceWeights,
    get_engine,
    initialize_engine,
)
from .logging_config import (
    setup_logging,
    stop_logging,
    get_logger,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "Catalog",
    "CatalogLoadError",
    "load_catalog",
    "load_collection",
    "save_collection",
    "EngineRegistry",
    "KnowledgeHubRecommendationEngine",
    "RelevanceWeights",
    "get_engine",
    "initialize_engine",
    "setup_logging",
    "stop_logging",
    "get_logger",
    "ThreadSafeLoggingConfig",
]
