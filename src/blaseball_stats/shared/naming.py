import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def strip_accents(name: str) -> str:
    nfkd = unicodedata.normalize("NFKD", name)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def slugify(name: str | None) -> str | None:
    """Build a URL slug from a display name.

    Accents are stripped, the result lowercased, and every whitespace
    character becomes a hyphen (runs of spaces are not collapsed).
    """
    if not name:
        return None
    return _WHITESPACE_RE.sub("-", strip_accents(name).lower())


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()
