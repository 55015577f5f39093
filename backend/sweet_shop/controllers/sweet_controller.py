"""
Sweet controller for handling HTTP requests.

This controller handles HTTP concerns only: it parses the request into
DTOs, calls :class:`InventoryService` and shapes the JSON envelope.
Failures are reported as ``{success: false, error}``.
"""

import logging

from flask import Blueprint, request

from sweet_shop.core.api_utils import api_response, error_response, list_response
from sweet_shop.core.auth_decorators import get_current_user, token_required
from sweet_shop.core.container import get_inventory_service
from sweet_shop.core.exceptions import StorageFailure, SweetShopError
from sweet_shop.schemas.dtos import (
    PriceRangeQuery,
    StockAdjustmentRequest,
    parse_sweet_fields,
)

logger = logging.getLogger(__name__)

sweets_bp = Blueprint("sweets", __name__, url_prefix="/api/sweets")


@sweets_bp.errorhandler(SweetShopError)
def handle_sweet_shop_error(error: SweetShopError):
    if isinstance(error, StorageFailure):
        logger.error(
            "Storage failure",
            extra={"context": {"path": request.path, "error": error.message}},
        )
    return error_response(error.message, error.status_code)


def _log_stock_change(action: str, sweet_id: int, amount: int) -> None:
    user = get_current_user()
    logger.info(
        "Stock adjusted",
        extra={
            "context": {
                "action": action,
                "sweet_id": sweet_id,
                "amount": amount,
                "user_id": user.user_id if user else None,
            }
        },
    )


@sweets_bp.route("", methods=["GET"])
@token_required
def list_sweets():
    """List all sweets."""
    return list_response(get_inventory_service().list_all())


@sweets_bp.route("/<int:sweet_id>", methods=["GET"])
@token_required
def get_sweet(sweet_id: int):
    sweet = get_inventory_service().get_by_id(sweet_id)
    return api_response(True, data=sweet.to_dict())


@sweets_bp.route("", methods=["POST"])
@token_required
def create_sweet():
    """Add a new sweet."""
    fields = parse_sweet_fields(request.get_json(silent=True))
    sweet = get_inventory_service().add(fields)
    return api_response(True, "Sweet created successfully", sweet.to_dict(), 201)


@sweets_bp.route("/<int:sweet_id>", methods=["PUT"])
@token_required
def update_sweet(sweet_id: int):
    fields = parse_sweet_fields(request.get_json(silent=True))
    sweet = get_inventory_service().update(sweet_id, fields)
    return api_response(True, "Sweet updated successfully", sweet.to_dict())


@sweets_bp.route("/<int:sweet_id>", methods=["DELETE"])
@token_required
def delete_sweet(sweet_id: int):
    get_inventory_service().delete(sweet_id)
    return api_response(True, "Sweet deleted successfully")


@sweets_bp.route("/search/category/<category>", methods=["GET"])
@token_required
def search_by_category(category: str):
    return list_response(get_inventory_service().search_by_category(category))


@sweets_bp.route("/search/name/<name>", methods=["GET"])
@token_required
def search_by_name(name: str):
    return list_response(get_inventory_service().search_by_name(name))


@sweets_bp.route("/search/price", methods=["GET"])
@token_required
def search_by_price():
    """Search by price range. ``min`` defaults to 0, ``max`` to unbounded."""
    query = PriceRangeQuery.from_args(request.args)
    sweets = get_inventory_service().search_by_price_range(
        query.min_price, query.max_price
    )
    return list_response(sweets)


@sweets_bp.route("/<int:sweet_id>/purchase", methods=["POST"])
@token_required
def purchase_sweet(sweet_id: int):
    adjustment = StockAdjustmentRequest.from_json(request.get_json(silent=True))
    sweet = get_inventory_service().purchase(sweet_id, adjustment.quantity)
    _log_stock_change("purchase", sweet_id, adjustment.quantity)
    return api_response(
        True,
        f"Purchased {adjustment.quantity} units successfully",
        sweet.to_dict(),
    )


@sweets_bp.route("/<int:sweet_id>/restock", methods=["POST"])
@token_required
def restock_sweet(sweet_id: int):
    adjustment = StockAdjustmentRequest.from_json(request.get_json(silent=True))
    sweet = get_inventory_service().restock(sweet_id, adjustment.quantity)
    _log_stock_change("restock", sweet_id, adjustment.quantity)
    return api_response(
        True,
        f"Restocked {adjustment.quantity} units successfully",
        sweet.to_dict(),
    )


@sweets_bp.route("/<int:sweet_id>/stock", methods=["GET"])
@token_required
def check_stock(sweet_id: int):
    in_stock = get_inventory_service().check_stock(sweet_id)
    return api_response(
        True,
        "Sweet is in stock" if in_stock else "Sweet is out of stock",
        inStock=in_stock,
    )
