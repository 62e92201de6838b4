"""
Flask application for the Knowledge Hub Recommendation Service.
"""
import logging
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from knowledge_service.catalog_loader import load_catalog
from knowledge_service.recommendations import EngineRegistry, default_registry
from app.knowledge_hub import build_weights, create_knowledge_hub_module

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def resolve_catalog_dir(catalog_dir: str) -> Path:
    """Relative catalogue paths are taken from the project root."""
    path = Path(catalog_dir)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def create_app(
    config: Optional[ConfigManager] = None,
    registry: Optional[EngineRegistry] = None,
) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Configuration manager (defaults to one reading knowledge_hub_config.json)
        registry: Engine registry (defaults to the process-wide registry)

    Returns:
        Configured Flask app with the knowledge hub blueprint registered
    """
    config = config or ConfigManager()
    registry = registry or default_registry

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    rec_config = config.get_recommendation_config()
    catalog_dir = resolve_catalog_dir(config.get_paths_config().catalog_dir)

    # -------------------------------------------------------------------------
    # Recommendation engine
    # -------------------------------------------------------------------------

    catalog = load_catalog(catalog_dir)
    registry.initialize(
        catalog.theories,
        catalog.blog_posts,
        catalog.projects,
        weights=build_weights(rec_config),
    )

    # -------------------------------------------------------------------------
    # Flask app
    # -------------------------------------------------------------------------

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_proto=1,     # trust 1 hop for X-Forwarded-Proto
        x_host=1,      # trust 1 hop for X-Forwarded-Host
        x_prefix=1)    # trust 1 hop for X-Forwarded-Prefix

    knowledge_hub_module = create_knowledge_hub_module(
        registry=registry,
        settings=rec_config,
        catalog_dir=catalog_dir,
    )
    app.register_blueprint(knowledge_hub_module["blueprint"])
    app.extensions["knowledge_hub"] = knowledge_hub_module

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"})

    logger.info(f"Knowledge hub app created with catalogue at {catalog_dir}")
    return app
