"""
Common API utilities for consistent response formatting across all controllers.
"""

from typing import Any, Optional

from flask import jsonify


def api_response(
    success: bool,
    message: Optional[str] = None,
    data: Optional[Any] = None,
    status_code: int = 200,
    **fields: Any,
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Optional human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code
        **fields: Extra top-level keys (e.g. ``count``, ``inStock``)

    Returns:
        Tuple of (json_response, status_code)
    """
    response = {"success": success}
    response.update(fields)

    if message is not None:
        response["message"] = message

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def error_response(message: str, status_code: int, key: str = "error") -> tuple:
    """Failure envelope. Sweet routes report ``error``; auth routes ``message``."""
    return jsonify({"success": False, key: message}), status_code


def list_response(items: list) -> tuple:
    """Envelope for collection reads: ``{success, count, data}``."""
    return api_response(True, data=[i.to_dict() for i in items], count=len(items))
