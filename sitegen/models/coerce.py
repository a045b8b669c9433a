"""
Coercion helpers for provider payloads.

Model output is loosely typed: lists arrive as strings, numbers as text,
fields go missing. These helpers normalize values at the model boundary.
"""

import re
from typing import Any, Tuple

_CAMEL_BOUNDARY = re.compile(r"_([a-z0-9])")


def to_camel(name: str) -> str:
    """snake_case -> camelCase (wire format)."""
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def pick(data: dict, name: str, default: Any = None) -> Any:
    """Read a field by its camelCase wire name, falling back to snake_case."""
    if not isinstance(data, dict):
        return default
    value = data.get(to_camel(name))
    if value is None:
        value = data.get(name)
    return default if value is None else value


def as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip()
    return str(value)


def as_str_tuple(value: Any) -> Tuple[str, ...]:
    """Normalize a list-ish value to a tuple of non-empty strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value.strip(),) if value.strip() else ()
    if isinstance(value, (list, tuple)):
        return tuple(as_str(v) for v in value if v is not None and as_str(v))
    return ()


def as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


def clamp_unit(value: Any, default: float = 0.5) -> float:
    """Clamp a numeric-ish value into [0, 1]."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = default
    if number != number:  # NaN
        number = default
    return max(0.0, min(1.0, number))
