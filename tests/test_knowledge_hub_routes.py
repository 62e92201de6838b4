"""
Integration tests for the knowledge hub HTTP API.
"""

import json
import os
from unittest.mock import patch

import pytest

from app.main import create_app
from config_manager import ConfigManager
from knowledge_service.catalog_loader import (
    BLOG_POSTS_FILE,
    PROJECTS_FILE,
    THEORIES_FILE,
    save_collection,
)
from knowledge_service.models import (
    BlogPostReference,
    ProjectReference,
    Theory,
    TheoryCategory,
    TheoryMetadata,
)
from knowledge_service.recommendations import EngineRegistry


def _make_theory(theory_id, category, tags=(), summary=""):
    return Theory(
        id=theory_id,
        title=theory_id.replace("-", " ").title(),
        category=category,
        summary=summary,
        metadata=TheoryMetadata(tags=tuple(tags)),
    )


THEORIES = [
    _make_theory("anchoring-bias", TheoryCategory.COGNITIVE_BIASES,
                 ["pricing", "decision-making"], "First numbers stick."),
    _make_theory("scarcity-principle", TheoryCategory.PERSUASION_PRINCIPLES, ["scarcity", "urgency"]),
    _make_theory("loss-aversion", TheoryCategory.BEHAVIORAL_ECONOMICS, ["loss", "decision-making"]),
    _make_theory("hicks-law", TheoryCategory.UX_PSYCHOLOGY, ["simplicity"]),
]


@pytest.fixture
def catalog_dir(tmp_path):
    directory = tmp_path / "catalog"
    save_collection(directory / THEORIES_FILE, THEORIES)
    save_collection(directory / BLOG_POSTS_FILE, [
        BlogPostReference(id="post-1", title="Pricing", slug="psychology-of-pricing", tags=("pricing",)),
    ])
    save_collection(directory / PROJECTS_FILE, [
        ProjectReference(id="optimizer", title="Optimizer", category="marketing"),
    ])
    return directory


@pytest.fixture
def app(tmp_path, catalog_dir):
    config_file = tmp_path / "knowledge_hub_config.json"
    config_file.write_text(json.dumps({
        "paths": {"catalog_dir": str(catalog_dir)},
        "recommendations": {"max_limit": 5}
    }), encoding="utf-8")
    with patch.dict(os.environ, {}, clear=True):
        config = ConfigManager(str(config_file))

    app = create_app(config=config, registry=EngineRegistry())
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


class TestTheoryEndpoints:

    def test_health(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_list_theories(self, client):
        response = client.get('/api/knowledge-hub/theories')

        data = response.get_json()
        assert response.status_code == 200
        assert data["count"] == 4
        assert data["theories"][0]["id"] == "anchoring-bias"
        assert data["theories"][0]["category"] == "cognitive-biases"

    def test_list_theories_by_category(self, client):
        response = client.get('/api/knowledge-hub/theories?category=ux-psychology')

        assert [t["id"] for t in response.get_json()["theories"]] == ["hicks-law"]

    def test_get_theory(self, client):
        response = client.get('/api/knowledge-hub/theories/anchoring-bias')

        data = response.get_json()
        assert response.status_code == 200
        assert data["summary"] == "First numbers stick."
        assert data["metadata"]["tags"] == ["pricing", "decision-making"]

    def test_unknown_theory_is_404(self, client):
        for path in ('', '/related', '/cross-links'):
            response = client.get(f'/api/knowledge-hub/theories/nope{path}')
            assert response.status_code == 404
            assert "nope" in response.get_json()["error"]

    def test_related_excludes_read_theories(self, client):
        response = client.get(
            '/api/knowledge-hub/theories/scarcity-principle/related?read=anchoring-bias&limit=2'
        )

        data = response.get_json()
        assert response.status_code == 200
        assert [t["id"] for t in data["related"]] == ["loss-aversion", "hicks-law"]
        assert data["count"] == 2

    def test_related_rejects_bad_limit(self, client):
        for limit in ("abc", "-1"):
            response = client.get(f'/api/knowledge-hub/theories/anchoring-bias/related?limit={limit}')
            assert response.status_code == 400
            assert "limit" in response.get_json()["error"]

    def test_cross_links(self, client):
        response = client.get('/api/knowledge-hub/theories/anchoring-bias/cross-links')

        data = response.get_json()
        urls = {link["id"]: link["url"] for link in data["links"]}
        assert urls["loss-aversion"] == "/dashboard/knowledge-hub/theory/loss-aversion"
        assert urls["post-1"] == "/blog/psychology-of-pricing"
        assert urls["optimizer"] == "/projects"
        assert {link["type"] for link in data["links"]} == {"theory", "blog-post", "project"}


class TestRecommendationEndpoints:

    def test_category_recommendations(self, client):
        response = client.get('/api/knowledge-hub/recommendations?categories=cognitive-biases')

        data = response.get_json()
        kinds = [(item["kind"], item["payload"]["id"]) for item in data["items"]]
        assert data["categories"] == ["cognitive-biases"]
        assert kinds[0] == ("theory", "anchoring-bias")
        assert ("blog-post", "post-1") in kinds
        assert ("project", "optimizer") in kinds

    def test_recommendations_limit_is_capped(self, client):
        response = client.get(
            '/api/knowledge-hub/recommendations'
            '?categories=cognitive-biases,persuasion-principles,behavioral-economics,ux-psychology&limit=50'
        )

        assert response.get_json()["count"] == 5

    def test_recommendations_unknown_category(self, client):
        response = client.get('/api/knowledge-hub/recommendations?categories=astrology')

        assert response.status_code == 200
        assert response.get_json()["items"] == []

    def test_personalized_recommendations(self, client):
        response = client.post('/api/knowledge-hub/recommendations/personalized', json={
            "readTheories": ["anchoring-bias"],
            "categoriesExplored": ["cognitive-biases", "ux-psychology", "ux-psychology"],
            "limit": 3
        })

        data = response.get_json()
        ids = [item["payload"]["id"] for item in data["items"]]
        assert response.status_code == 200
        assert data["categories"][0] == "ux-psychology"
        assert "anchoring-bias" not in ids
        assert "hicks-law" in ids
        assert data["count"] <= 3

    def test_personalized_rejects_invalid_body(self, client):
        not_json = client.post('/api/knowledge-hub/recommendations/personalized', data="nope")
        bad_category = client.post('/api/knowledge-hub/recommendations/personalized', json={
            "categoriesExplored": ["astrology"]
        })

        assert not_json.status_code == 400
        assert bad_category.status_code == 400

    def test_trending(self, client):
        response = client.get('/api/knowledge-hub/trending?limit=2')

        data = response.get_json()
        assert data["count"] == 2
        assert all(item["kind"] == "theory" for item in data["items"])


class TestCatalogReload:

    def test_reload_picks_up_new_files(self, client, catalog_dir):
        save_collection(catalog_dir / THEORIES_FILE, THEORIES[:1])

        response = client.post('/api/knowledge-hub/catalog/reload')

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok", "theories": 1, "blog_posts": 1, "projects": 1}
        assert client.get('/api/knowledge-hub/theories/loss-aversion').status_code == 404

    def test_reload_failure_keeps_serving(self, client, catalog_dir):
        (catalog_dir / THEORIES_FILE).write_text("{broken", encoding="utf-8")

        response = client.post('/api/knowledge-hub/catalog/reload')

        assert response.status_code == 500
        assert "error" in response.get_json()
        assert client.get('/api/knowledge-hub/theories').get_json()["count"] == 4
