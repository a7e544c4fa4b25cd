"""HTTP endpoints for laptop search and autocomplete suggestions."""

import logging
from typing import Tuple, Union

from flask import Blueprint, Response, current_app, jsonify, request

from catalog.db import CatalogUnavailableError
from storefront.logging_utils import log_interaction
from storefront.search import handle_search, handle_suggest

__all__ = ["api"]

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__)


def _store():
    return current_app.config["CATALOG_STORE"]


def _record_failure(operation: str, error: Exception, query: str) -> None:
    current_app.config["ERROR_LOGGER"].log_error(
        error_type="database_error",
        error=error,
        operation=operation,
        user_input=query,
    )
    log_interaction("search_error", {"operation": operation, "query": query, "error": str(error)})


@api.route("/search", methods=["GET"])
def search_laptops() -> Union[Tuple[Response, int], Response]:
    """Full-text fuzzy search over available laptops.

    Query params:
        q: Search text. Missing or empty returns ``{"results": []}``.

    Response JSON:
        {"results": [{...laptop...}, ...], "query": "..."}
    """
    query = request.args.get("q")
    try:
        response = handle_search(query, _store())
    except CatalogUnavailableError as e:
        logger.exception("Error searching laptops")
        _record_failure("search", e, query)
        return jsonify({"error": "Failed to search laptops"}), 500

    return jsonify(response.to_dict())


@api.route("/suggest", methods=["GET"])
def suggest_laptops() -> Union[Tuple[Response, int], Response]:
    """Ranked autocomplete suggestions (top 8, compact records).

    Query params:
        q: Partial search text. Under 2 characters after trimming returns
           ``{"suggestions": []}``.

    Response JSON:
        {"suggestions": [{"id", "name", "slug", "image", "price",
                          "brand_name", "score"}, ...]}
    """
    query = request.args.get("q")
    try:
        response = handle_suggest(query, _store())
    except CatalogUnavailableError as e:
        logger.exception("Error fetching suggestions")
        _record_failure("suggest", e, query)
        return jsonify({"error": "Failed to fetch suggestions"}), 500

    return jsonify(response.to_dict())


@api.route("/health", methods=["GET"])
def health() -> Union[Tuple[Response, int], Response]:
    """Liveness check that also confirms the catalog is readable."""
    try:
        count = _store().product_count()
    except CatalogUnavailableError:
        logger.exception("Health check failed")
        return jsonify({"status": "error"}), 503

    return jsonify({"status": "ok", "products": count})
