"""Type coercion for model attributes before they reach the database."""
from __future__ import annotations

from typing import Any

from .errors import ValidationError

TRUE_VALUES = {"true", "1"}
FALSE_VALUES = {"false", "0"}


def coerce_string(model: str, field: str, value: Any) -> str | None:
    """Accept text and plain numbers; numbers are stored in their str() form."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(
        f"{model}.{field} expects a string, got {type(value).__name__}",
        model=model,
        field=field,
    )


def coerce_float(model: str, field: str, value: Any) -> float | None:
    """Accept ints, floats and numeric strings; booleans are rejected."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{model}.{field} expects a number, got bool", model=model, field=field)
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            raise ValidationError(
                f"{model}.{field} is out of range for a float column",
                model=model,
                field=field,
            ) from None
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ValidationError(
        f"{model}.{field} expects a number, got {value!r}",
        model=model,
        field=field,
    )


def coerce_bool(model: str, field: str, value: Any) -> bool | None:
    """Accept booleans, 0/1 and their string spellings."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ValidationError(
        f"{model}.{field} expects a boolean, got {value!r}",
        model=model,
        field=field,
    )
