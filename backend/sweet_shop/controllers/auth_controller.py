"""
Authentication controller: registration and login.

Failures are reported as ``{success: false, message}``.
"""

import logging

from flask import Blueprint, request

from sweet_shop.core.api_utils import api_response, error_response
from sweet_shop.core.container import get_access_service
from sweet_shop.core.exceptions import StorageFailure, SweetShopError
from sweet_shop.schemas.dtos import CredentialsRequest

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.errorhandler(SweetShopError)
def handle_auth_error(error: SweetShopError):
    if isinstance(error, StorageFailure):
        logger.error(
            "Storage failure during authentication",
            extra={"context": {"path": request.path, "error": error.message}},
        )
    return error_response(error.message, error.status_code, key="message")


@auth_bp.route("/register", methods=["POST"])
def register():
    """Register a new user and return the user with an access token."""
    credentials = CredentialsRequest.from_json(request.get_json(silent=True))
    result = get_access_service().register(credentials.email, credentials.password)
    return api_response(True, "User registered successfully", result.to_dict(), 201)


@auth_bp.route("/login", methods=["POST"])
def login():
    credentials = CredentialsRequest.from_json(request.get_json(silent=True))
    result = get_access_service().login(credentials.email, credentials.password)
    return api_response(True, "Login successful", result.to_dict())
