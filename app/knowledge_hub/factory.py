"""
Factory for creating the knowledge hub module.
"""
from pathlib import Path
from typing import Optional

from config_manager import RecommendationConfig
from knowledge_service.recommendations import EngineRegistry
from .services import KnowledgeHubService
from .routes import create_knowledge_hub_routes


def create_knowledge_hub_module(
    registry: EngineRegistry,
    settings: RecommendationConfig,
    catalog_dir: Optional[Path] = None,
) -> dict:
    """
    Create the knowledge hub module with all its components.

    Args:
        registry: Registry holding the current recommendation engine
        settings: Recommendation limits and weights
        catalog_dir: Directory the catalogue is (re)loaded from

    Returns:
        Dictionary containing:
            - service: KnowledgeHubService instance
            - blueprint: Flask blueprint for routes
    """
    service = KnowledgeHubService(registry, settings, catalog_dir)
    blueprint = create_knowledge_hub_routes(service)

    return {
        "service": service,
        "blueprint": blueprint
    }
