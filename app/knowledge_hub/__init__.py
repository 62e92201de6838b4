"""
Knowledge hub module: theory lookup, recommendations and cross-links.
"""

from .services import KnowledgeHubService, build_weights
from .routes import create_knowledge_hub_routes
from .factory import create_knowledge_hub_module

__all__ = [
    'KnowledgeHubService',
    'build_weights',
    'create_knowledge_hub_routes',
    'create_knowledge_hub_module',
]
