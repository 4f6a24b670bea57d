"""Conversion between dataclasses and the camelCase JSON the pipeline persists.

Usage:
    payload = to_json_dict(tally)          # {"atBats": 3, "hits": 1, ...}
    tally = from_json_dict(BattingTally, payload)
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from blaseball_stats.shared.naming import to_camel


def to_json_value(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return to_json_dict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(v) for v in value]
    return value


def to_json_dict(obj: Any, *, omit_none: bool = False) -> dict[str, Any]:
    """Serialize a dataclass instance into a camelCase keyed dict.

    Fields whose metadata sets ``json=False`` are skipped.
    """
    result: dict[str, Any] = {}
    for f in fields(obj):
        if not f.metadata.get("json", True):
            continue
        value = getattr(obj, f.name)
        if omit_none and value is None:
            continue
        result[f.metadata.get("key", to_camel(f.name))] = to_json_value(value)
    return result


def from_json_dict[T](cls: type[T], data: dict[str, Any]) -> T:
    """Build a flat dataclass from a camelCase keyed dict.

    Unknown keys are ignored and missing keys fall back to field defaults.
    """
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        if not f.init or not f.metadata.get("json", True):
            continue
        key = f.metadata.get("key", to_camel(f.name))
        if key in data:
            kwargs[f.name] = data[key]
    return cls(**kwargs)
