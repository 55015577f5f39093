"""
Authentication helpers for this application.

Every inventory route requires a bearer token issued by ``/api/auth``:

    Authorization: Bearer <token>

There is no server-side session; the token is verified on each request and
its claims are exposed as ``g.current_user`` (a :class:`TokenClaims`).

Example:
    @sweets_bp.route("/<int:sweet_id>", methods=["GET"])
    @token_required
    def get_sweet(sweet_id):
        user_id = g.current_user.user_id
"""

import logging
from functools import wraps
from typing import Optional

from flask import g, request

from sweet_shop.core.api_utils import error_response
from sweet_shop.core.container import get_access_service
from sweet_shop.core.exceptions import UnauthorizedError
from sweet_shop.schemas.dtos import TokenClaims

logger = logging.getLogger(__name__)


def get_current_user() -> Optional[TokenClaims]:
    """Return the claims of the authenticated caller, if any."""
    return g.get("current_user")


def token_required(f):
    """Decorator to require a valid bearer token.

    Answers 401 ``{success: false, message}`` when the header is missing,
    malformed, or carries a token that does not verify.
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return error_response("No token provided", 401, key="message")

        parts = auth_header.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer":
            return error_response("Invalid token format", 401, key="message")

        try:
            claims = get_access_service().verify_token(parts[1])
        except UnauthorizedError:
            logger.info(
                "Rejected bearer token",
                extra={"context": {"path": request.path}},
            )
            return error_response("Invalid or expired token", 401, key="message")

        g.current_user = claims
        return f(*args, **kwargs)

    return decorated_function
