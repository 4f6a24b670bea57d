"""Naming and JSON helpers shared by the domain and output layers."""

from blaseball_stats.shared.naming import slugify, strip_accents, to_camel, to_snake
from blaseball_stats.shared.serialization import from_json_dict, to_json_dict, to_json_value

__all__ = [
    "from_json_dict",
    "slugify",
    "strip_accents",
    "to_camel",
    "to_json_dict",
    "to_json_value",
    "to_snake",
]
