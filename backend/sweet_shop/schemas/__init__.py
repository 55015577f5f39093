from .dtos import (
    AuthResult,
    CredentialsRequest,
    PriceRangeQuery,
    StockAdjustmentRequest,
    TokenClaims,
    parse_sweet_fields,
)

__all__ = [
    "AuthResult",
    "CredentialsRequest",
    "PriceRangeQuery",
    "StockAdjustmentRequest",
    "TokenClaims",
    "parse_sweet_fields",
]
