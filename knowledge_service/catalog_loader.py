"""
Catalogue Loading for the Knowledge Hub

This module reads the theory, blog post and project catalogues from JSON files
and validates them into Pydantic models. It is the only part of
knowledge_service that touches the filesystem; the recommendation engine itself
works purely on the collections it is given.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .models import BlogPostReference, ProjectReference, Theory

logger = logging.getLogger(__name__)

THEORIES_FILE = "theories.json"
BLOG_POSTS_FILE = "blog_posts.json"
PROJECTS_FILE = "projects.json"

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogLoadError(Exception):
    """Raised when a catalogue file exists but cannot be parsed or validated."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load catalogue file {path}: {reason}")


@dataclass
class Catalog:
    """The three content collections read from a catalogue directory."""
    theories: List[Theory] = field(default_factory=list)
    blog_posts: List[BlogPostReference] = field(default_factory=list)
    projects: List[ProjectReference] = field(default_factory=list)

    def counts(self) -> Tuple[int, int, int]:
        return len(self.theories), len(self.blog_posts), len(self.projects)


def load_collection(path: Path, model: Type[ModelT]) -> List[ModelT]:
    """Load a JSON array of records from `path` into `model` instances.

    A missing file yields an empty list. Invalid JSON, a non-array document or
    a record that fails validation raises `CatalogLoadError`.

    Args:
        path: JSON file to read
        model: Pydantic model used to validate each record

    Returns:
        List of validated model instances, in file order
    """
    if not path.exists():
        logger.warning(f"Catalogue file not found, using empty collection: {path}")
        return []

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(path, f"invalid JSON ({e})") from e

    if not isinstance(raw, list):
        raise CatalogLoadError(path, f"expected a JSON array, got {type(raw).__name__}")

    records: List[ModelT] = []
    for index, item in enumerate(raw):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            raise CatalogLoadError(path, f"record {index} is invalid: {e}") from e
    return records


def load_catalog(catalog_dir: Union[str, Path]) -> Catalog:
    """Load all three collections from a catalogue directory.

    Args:
        catalog_dir: Directory containing theories.json, blog_posts.json and projects.json

    Returns:
        Catalog with whatever collections were found
    """
    catalog_dir = Path(catalog_dir)
    if not catalog_dir.is_dir():
        logger.warning(f"Catalogue directory not found: {catalog_dir}")
        return Catalog()

    catalog = Catalog(
        theories=load_collection(catalog_dir / THEORIES_FILE, Theory),
        blog_posts=load_collection(catalog_dir / BLOG_POSTS_FILE, BlogPostReference),
        projects=load_collection(catalog_dir / PROJECTS_FILE, ProjectReference),
    )
    theories, posts, projects = catalog.counts()
    logger.info(f"Loaded catalogue from {catalog_dir}: {theories} theories, {posts} blog posts, {projects} projects")
    return catalog


def save_collection(path: Path, records: List[BaseModel]) -> None:
    """Write records back as a JSON array using their camelCase aliases."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(
            [record.model_dump(mode='json', by_alias=True, exclude_none=True) for record in records],
            f, ensure_ascii=False, indent=2,
        )
