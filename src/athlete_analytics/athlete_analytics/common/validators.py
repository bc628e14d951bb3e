from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_non_negative(value: float | Decimal, field_name: str) -> float | Decimal:
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative (got {value})")
    return value


def require_month(value: int, field_name: str = "month") -> int:
    month = int(value)
    if not 1 <= month <= 12:
        raise ValidationError(f"{field_name} must be between 1 and 12 (got {value})")
    return month


def require_year(value: int, field_name: str = "year") -> int:
    year = int(value)
    # month_bounds needs the following January to exist
    if not 1 <= year <= 9998:
        raise ValidationError(f"{field_name} must be between 1 and 9998 (got {value})")
    return year


def to_decimal(value, field_name: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        # str() keeps 0.1 as 0.1 instead of its binary float expansion
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"{field_name} is not a number: {value!r}") from e


def parse_enum(enum_cls: Type[E], value, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).upper())
    except ValueError as e:
        raise ValidationError(f"{field_name} has unknown value {value!r}") from e
