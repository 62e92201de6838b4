"""
Knowledge hub routes for API endpoints.
"""
import logging
from typing import Any, Dict, List, Optional

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from knowledge_service.catalog_loader import CatalogLoadError
from knowledge_service.models import Theory, UserProgressView
from .services import KnowledgeHubService

logger = logging.getLogger(__name__)


class InvalidRequestError(ValueError):
    """Invalid query parameter or request body."""


def _parse_limit(raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise InvalidRequestError(f"limit must be an integer, got {raw!r}")
    if limit < 0:
        raise InvalidRequestError(f"limit must not be negative, got {limit}")
    return limit


def _parse_csv(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _progress_from_args() -> Optional[UserProgressView]:
    """Build a progress view from the `read` query parameter, if given."""
    read = _parse_csv(request.args.get("read"))
    if not read:
        return None
    return UserProgressView(read_theories=frozenset(read))


def _theory_summary(theory: Theory) -> Dict[str, Any]:
    return {
        "id": theory.id,
        "title": theory.title,
        "category": theory.category.value,
        "summary": theory.summary,
        "difficulty": theory.metadata.difficulty.value,
        "read_time": theory.metadata.read_time,
        "tags": list(theory.metadata.tags),
    }


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def create_knowledge_hub_routes(knowledge_hub_service: KnowledgeHubService) -> Blueprint:
    """Create knowledge hub routes blueprint."""
    bp = Blueprint('knowledge_hub', __name__, url_prefix='/api/knowledge-hub')

    @bp.errorhandler(InvalidRequestError)
    def handle_invalid_request(error: InvalidRequestError):
        return _error(str(error), 400)

    @bp.route('/theories', methods=['GET'])
    def list_theories():
        """
        List theories, optionally filtered by category.

        Query parameters:
            - category: Theory category value (e.g. 'cognitive-biases')
        """
        theories = knowledge_hub_service.list_theories(request.args.get('category') or None)
        return jsonify({
            "theories": [_theory_summary(t) for t in theories],
            "count": len(theories)
        })

    @bp.route('/theories/<theory_id>', methods=['GET'])
    def get_theory(theory_id: str):
        theory = knowledge_hub_service.get_theory(theory_id)
        if theory is None:
            return _error(f"Theory not found: {theory_id}", 404)
        return jsonify(theory.model_dump(mode='json'))

    @bp.route('/theories/<theory_id>/related', methods=['GET'])
    def get_related_theories(theory_id: str):
        """
        Related theories for a theory.

        Query parameters:
            - limit: Maximum theories to return (default from config)
            - read: Comma-separated ids of theories the user has already read
        """
        theory = knowledge_hub_service.get_theory(theory_id)
        if theory is None:
            return _error(f"Theory not found: {theory_id}", 404)

        limit = _parse_limit(request.args.get('limit'))
        related = knowledge_hub_service.related_theories(theory, _progress_from_args(), limit)
        return jsonify({
            "theory_id": theory_id,
            "related": [_theory_summary(t) for t in related],
            "count": len(related)
        })

    @bp.route('/theories/<theory_id>/cross-links', methods=['GET'])
    def get_cross_links(theory_id: str):
        theory = knowledge_hub_service.get_theory(theory_id)
        if theory is None:
            return _error(f"Theory not found: {theory_id}", 404)

        links = knowledge_hub_service.cross_links(theory)
        return jsonify({
            "theory_id": theory_id,
            "links": [link.model_dump(mode='json') for link in links],
            "count": len(links)
        })

    @bp.route('/recommendations', methods=['GET'])
    def get_recommendations():
        """
        Mixed content recommendations for a set of categories.

        Query parameters:
            - categories: Comma-separated category values
            - limit: Maximum items to return (default from config)
            - read: Comma-separated ids of theories the user has already read
        """
        categories = _parse_csv(request.args.get('categories'))
        limit = _parse_limit(request.args.get('limit'))
        items = knowledge_hub_service.content_recommendations(categories, _progress_from_args(), limit)
        return jsonify({
            "categories": categories,
            "items": [item.model_dump(mode='json') for item in items],
            "count": len(items)
        })

    @bp.route('/recommendations/personalized', methods=['POST'])
    def get_personalized_recommendations():
        """
        Recommendations derived from a user's progress.

        JSON body: the progress view (`read_theories`, `bookmarked_theories`,
        `categories_explored`, camelCase accepted) plus an optional `limit`.
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise InvalidRequestError("Request body must be a JSON object")

        payload = dict(payload)
        raw_limit = payload.pop('limit', None)
        limit = _parse_limit(None if raw_limit is None else str(raw_limit))
        try:
            progress = UserProgressView.model_validate(payload)
        except ValidationError as e:
            raise InvalidRequestError(f"Invalid progress: {e.errors(include_url=False)}")

        items = knowledge_hub_service.personalized_recommendations(progress, limit)
        return jsonify({
            "categories": [c.value for c in knowledge_hub_service.preferred_categories(progress)],
            "items": [item.model_dump(mode='json') for item in items],
            "count": len(items)
        })

    @bp.route('/trending', methods=['GET'])
    def get_trending():
        """Unpersonalized recommendations across all categories."""
        limit = _parse_limit(request.args.get('limit'))
        items = knowledge_hub_service.trending_content(limit)
        return jsonify({
            "items": [item.model_dump(mode='json') for item in items],
            "count": len(items)
        })

    @bp.route('/catalog/reload', methods=['POST'])
    def reload_catalog():
        """Re-read the catalogue files and replace the engine."""
        try:
            counts = knowledge_hub_service.reload_catalog()
        except CatalogLoadError as e:
            logger.error(f"Catalogue reload failed: {e}")
            return _error(str(e), 500)
        logger.info(f"Catalogue reloaded: {counts}")
        return jsonify({"status": "ok", **counts})

    return bp
