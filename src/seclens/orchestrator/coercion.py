"""Field coercers used by the per-kind descriptor tables.

Each coercer takes an untrusted JSON value and returns a value the result
models accept. `OMIT` tells the normalizer to leave the field out entirely.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

OMIT = object()

Coercer = Callable[[Any], Any]


def scalar_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def text(value: Any, default: str = "") -> str:
    clean = scalar_text(value)
    if clean is None or not clean.strip():
        return default
    return clean.strip()


def optional_text(value: Any) -> Any:
    clean = text(value)
    return clean if clean else OMIT


def positive_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value >= 1 else None
    if isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
        return number if number >= 1 else None
    return None


def string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [scalar_text(item) for item in value]
    return [item.strip() for item in items if item is not None and item.strip()]


def sorted_string_list(value: Any) -> list[str]:
    return sorted(string_list(value))


def enum_member(enum_type: type[Enum], fallback: Enum) -> Callable[[Any], Enum]:
    def _coerce(value: Any) -> Enum:
        if isinstance(value, enum_type):
            return value
        if isinstance(value, str):
            try:
                return enum_type(value.strip())
            except ValueError:
                return fallback
        return fallback

    return _coerce


def record_list(item: Callable[[Mapping[str, Any]], dict[str, Any] | None]) -> Coercer:
    """Keep mapping entries only; `item` may drop an entry by returning None."""

    def _coerce(value: Any) -> list[dict[str, Any]]:
        if not isinstance(value, list):
            return []
        records = []
        for entry in value:
            if not isinstance(entry, Mapping):
                continue
            record = item(entry)
            if record is not None:
                records.append(record)
        return records

    return _coerce


def optional_record(item: Callable[[Mapping[str, Any]], dict[str, Any]]) -> Coercer:
    def _coerce(value: Any) -> Any:
        if not isinstance(value, Mapping):
            return OMIT
        return item(value)

    return _coerce


def required_record(item: Callable[[Mapping[str, Any]], dict[str, Any]], default: Mapping[str, Any]) -> Coercer:
    def _coerce(value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            return dict(default)
        return item(value)

    return _coerce
