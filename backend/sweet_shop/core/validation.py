"""
Common validation utilities for request payloads.

Loosely-typed JSON values are coerced here into the types the services
expect. Coercion failures raise :class:`ValidationError`; range and
presence rules are left to the domain entities.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from sweet_shop.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class BaseValidator:
    """Base validator with common coercion methods."""

    @staticmethod
    def validate_string(value: Any, field_name: str) -> Optional[str]:
        """Validate string field. Missing stays None, blanks are stripped."""
        if value is None:
            return None

        if not isinstance(value, str):
            value = str(value)

        return value.strip()

    @staticmethod
    def validate_decimal(
        value: Any, field_name: str, message: str
    ) -> Optional[Decimal]:
        """Validate and convert decimal field."""
        if value is None or value == "":
            return None

        if isinstance(value, bool):
            raise ValidationError(message, field_name)

        if isinstance(value, Decimal):
            decimal_value = value
        elif isinstance(value, (int, float, str)):
            try:
                decimal_value = Decimal(str(value).strip())
            except InvalidOperation:
                logger.debug(
                    "Rejected non-numeric value",
                    extra={"context": {"field": field_name}},
                )
                raise ValidationError(message, field_name)
        else:
            raise ValidationError(message, field_name)

        if not decimal_value.is_finite():
            raise ValidationError(message, field_name)

        return decimal_value

    @staticmethod
    def validate_integer(value: Any, field_name: str, message: str) -> Optional[int]:
        """Validate and convert integer field."""
        if value is None or value == "":
            return None

        if isinstance(value, bool):
            raise ValidationError(message, field_name)

        if isinstance(value, int):
            return value

        if isinstance(value, float):
            if not value.is_integer():
                raise ValidationError(message, field_name)
            return int(value)

        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                raise ValidationError(message, field_name)

        raise ValidationError(message, field_name)
