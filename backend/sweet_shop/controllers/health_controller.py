"""
Health controller - welcome document and health check endpoints for monitoring.
"""

import logging

from flask import Blueprint, jsonify

from sweet_shop import __version__
from sweet_shop.core.container import get_container
from sweet_shop.db.session import check_connection

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)

ENDPOINTS = {
    "auth": {
        "POST /api/auth/register": "Register a new user",
        "POST /api/auth/login": "Log in and receive a token",
    },
    "sweets": {
        "GET /api/sweets": "Get all sweets",
        "GET /api/sweets/:id": "Get sweet by ID",
        "POST /api/sweets": "Create new sweet",
        "PUT /api/sweets/:id": "Update sweet",
        "DELETE /api/sweets/:id": "Delete sweet",
    },
    "search": {
        "GET /api/sweets/search/category/:category": "Search by category",
        "GET /api/sweets/search/name/:name": "Search by name",
        "GET /api/sweets/search/price?min=X&max=Y": "Search by price range",
    },
    "inventory": {
        "POST /api/sweets/:id/purchase": "Purchase sweet (decrease quantity)",
        "POST /api/sweets/:id/restock": "Restock sweet (increase quantity)",
        "GET /api/sweets/:id/stock": "Check stock status",
    },
}


@health_bp.route("/", methods=["GET"])
def index():
    """Welcome document listing the available endpoints."""
    return jsonify(
        {
            "message": "Welcome to Sweet Shop API",
            "version": __version__,
            "endpoints": ENDPOINTS,
        }
    )


@health_bp.route("/health", methods=["GET"])
def health_check():
    """
    Report database connectivity.

    Status codes:
        200: database reachable
        503: database unreachable

    Note:
        - No authentication required (monitoring endpoint)
    """
    database_ok = check_connection(get_container().engine)
    if not database_ok:
        logger.warning(
            "Health check failed", extra={"context": {"endpoint": "/health"}}
        )
    body = {"status": "healthy" if database_ok else "unhealthy", "database": database_ok}
    return jsonify(body), 200 if database_ok else 503
