from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import InvalidIdentifierError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def parse_identifier(value: Any, field_name: str = "id") -> int:
    """Store identifiers are positive integers; anything else is malformed."""
    if isinstance(value, bool):
        raise InvalidIdentifierError(f"Invalid {field_name}: {value!r}")
    if isinstance(value, int):
        ident = value
    else:
        v = str(value or "").strip()
        if not v.isdigit():
            raise InvalidIdentifierError(f"Invalid {field_name}: {value!r}")
        ident = int(v)
    if ident <= 0:
        raise InvalidIdentifierError(f"Invalid {field_name}: {value!r}")
    return ident


def optional_text(value: Any) -> Optional[str]:
    v = str(value).strip() if value is not None else ""
    return v or None


def parse_amount(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
