"""
Configuration management for the Knowledge Hub Recommendation Service.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class RecommendationConfig:
    """Recommendation limits and scoring weights."""
    related_limit: int
    default_limit: int
    max_limit: int
    cross_link_theories: int
    cross_link_blog_posts: int
    cross_link_projects: int
    personalized_categories: int
    description_length: int
    category_weight: float
    tag_weight: float
    difficulty_weight: float


@dataclass
class PathsConfig:
    """Path configuration settings."""
    catalog_dir: str


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "knowledge_hub_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        # Start with default config
        self._config = self._get_default_config()

        # Load base config from file
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        # Override with environment variables
        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False
            },
            "recommendations": {
                "related_limit": 5,
                "default_limit": 10,
                "max_limit": 50,
                "cross_link_theories": 3,
                "cross_link_blog_posts": 2,
                "cross_link_projects": 2,
                "personalized_categories": 3,
                "description_length": 100,
                "category_weight": 3.0,
                "tag_weight": 1.0,
                "difficulty_weight": 0.0
            },
            "paths": {
                "catalog_dir": "data/catalog"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        # Recommendation settings
        if os.getenv("RECOMMENDATION_LIMIT"):
            self._config["recommendations"]["default_limit"] = int(os.getenv("RECOMMENDATION_LIMIT"))

        if os.getenv("RECOMMENDATION_MAX_LIMIT"):
            self._config["recommendations"]["max_limit"] = int(os.getenv("RECOMMENDATION_MAX_LIMIT"))

        if os.getenv("CATEGORY_WEIGHT"):
            self._config["recommendations"]["category_weight"] = float(os.getenv("CATEGORY_WEIGHT"))

        if os.getenv("TAG_WEIGHT"):
            self._config["recommendations"]["tag_weight"] = float(os.getenv("TAG_WEIGHT"))

        if os.getenv("DIFFICULTY_WEIGHT"):
            self._config["recommendations"]["difficulty_weight"] = float(os.getenv("DIFFICULTY_WEIGHT"))

        # Paths
        if os.getenv("CATALOG_DIR"):
            self._config["paths"]["catalog_dir"] = os.getenv("CATALOG_DIR")

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_recommendation_config(self) -> RecommendationConfig:
        """Get recommendation configuration."""
        rec_config = self._config["recommendations"]
        return RecommendationConfig(
            related_limit=rec_config["related_limit"],
            default_limit=rec_config["default_limit"],
            max_limit=rec_config["max_limit"],
            cross_link_theories=rec_config["cross_link_theories"],
            cross_link_blog_posts=rec_config["cross_link_blog_posts"],
            cross_link_projects=rec_config["cross_link_projects"],
            personalized_categories=rec_config["personalized_categories"],
            description_length=rec_config["description_length"],
            category_weight=rec_config["category_weight"],
            tag_weight=rec_config["tag_weight"],
            difficulty_weight=rec_config["difficulty_weight"]
        )

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        paths_config = self._config["paths"]
        return PathsConfig(
            catalog_dir=paths_config["catalog_dir"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_recommendation_config() -> RecommendationConfig:
    """Get recommendation configuration."""
    return config_manager.get_recommendation_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
