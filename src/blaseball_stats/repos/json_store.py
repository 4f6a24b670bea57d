import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any | None:
    """Load a JSON document, treating a missing or unreadable file as absent."""
    if not path.exists():
        logger.debug("No prior output at %s", path)
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return None


def write_json(path: Path, payload: Any) -> None:
    """Write *payload* tab-indented, replacing *path* only once the write has finished."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    data = json.dumps(payload, indent="\t", ensure_ascii=False) + "\n"
    tmp_path.write_text(data, encoding="utf-8")
    tmp_path.replace(path)
    logger.debug("Wrote %s", path)
