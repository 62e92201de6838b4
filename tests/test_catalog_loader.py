"""
Tests for loading catalogue files from disk.
"""

import json
import logging
from datetime import date
from pathlib import Path

import pytest

from knowledge_service.catalog_loader import (
    BLOG_POSTS_FILE,
    PROJECTS_FILE,
    THEORIES_FILE,
    CatalogLoadError,
    load_catalog,
    load_collection,
    save_collection,
)
from knowledge_service.models import (
    BlogPostReference,
    DifficultyLevel,
    ProjectReference,
    Theory,
    TheoryCategory,
)

SHIPPED_CATALOG = Path(__file__).resolve().parent.parent / "data" / "catalog"


class TestLoadCollection:

    def test_reads_camel_case_records(self, tmp_path):
        path = tmp_path / THEORIES_FILE
        path.write_text(json.dumps([{
            "id": "anchoring-bias",
            "title": "Anchoring Bias",
            "category": "cognitive-biases",
            "summary": "First numbers stick.",
            "metadata": {"difficulty": "beginner", "readTime": 3, "tags": ["pricing"]},
            "isPremium": True,
        }]), encoding="utf-8")

        theories = load_collection(path, Theory)

        assert len(theories) == 1
        theory = theories[0]
        assert theory.category is TheoryCategory.COGNITIVE_BIASES
        assert theory.metadata.read_time == 3
        assert theory.metadata.tags == ("pricing",)
        assert theory.is_premium is True

    def test_missing_file_is_empty(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="knowledge_service.catalog_loader"):
            assert load_collection(tmp_path / "missing.json", Theory) == []

        assert "not found" in caplog.text

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / THEORIES_FILE
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogLoadError) as excinfo:
            load_collection(path, Theory)

        assert excinfo.value.path == path

    def test_non_array_document_raises(self, tmp_path):
        path = tmp_path / THEORIES_FILE
        path.write_text(json.dumps({"id": "x"}), encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="expected a JSON array"):
            load_collection(path, Theory)

    def test_invalid_record_raises(self, tmp_path):
        path = tmp_path / THEORIES_FILE
        path.write_text(json.dumps([{"id": "x", "title": "X", "category": "astrology"}]), encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="record 0"):
            load_collection(path, Theory)

    def test_save_then_load_keeps_aliases(self, tmp_path):
        path = tmp_path / "nested" / BLOG_POSTS_FILE
        post = BlogPostReference(
            id="psychology-of-pricing",
            title="The Psychology of Pricing",
            slug="psychology-of-pricing",
            tags=("pricing",),
            published_at=date(2024, 1, 15),
            read_time=8,
        )

        save_collection(path, [post])

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw[0]["publishedAt"] == "2024-01-15"
        assert raw[0]["readTime"] == 8
        assert load_collection(path, BlogPostReference) == [post]


class TestLoadCatalog:

    def test_missing_directory_gives_empty_catalog(self, tmp_path):
        catalog = load_catalog(tmp_path / "nowhere")

        assert catalog.counts() == (0, 0, 0)

    def test_partial_directory(self, tmp_path):
        save_collection(tmp_path / PROJECTS_FILE, [
            ProjectReference(id="optimizer", title="Optimizer", category="marketing"),
        ])

        catalog = load_catalog(tmp_path)

        assert catalog.counts() == (0, 0, 1)
        assert catalog.projects[0].id == "optimizer"

    def test_shipped_catalog_loads(self):
        catalog = load_catalog(SHIPPED_CATALOG)
        theories, blog_posts, projects = catalog.counts()

        assert theories >= 5
        assert blog_posts > 0
        assert projects > 0
        assert {t.category for t in catalog.theories} == set(TheoryCategory)
        assert len({t.id for t in catalog.theories}) == theories

        fogg = next(t for t in catalog.theories if t.id == "fogg-behavior-model")
        assert fogg.metadata.difficulty is DifficultyLevel.ADVANCED
        assert fogg.is_premium
