"""
JSON Loader - Loads a dataset from a JSON file or an already-parsed mapping.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from ..engine_core.entity_store import EntityPool
from ..errors import DataFormatError
from .base import DataLoader, build_pool, parse_document

logger = logging.getLogger(__name__)


def read_json_source(source: str | Path | Mapping[str, Any]) -> Any:
    """Return parsed JSON for a path, or the mapping itself."""
    if isinstance(source, Mapping):
        return source

    path = Path(source)
    logger.info("Reading dataset from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise DataFormatError(f"Dataset file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise DataFormatError(f"Invalid JSON in {path}: {e}") from e


class JSONLoader(DataLoader):
    """
    Loads picks from a JSON document.

    The source is either a path to a .json file or a dict with the
    same structure (useful for tests and for datasets fetched elsewhere).
    """

    def load(self, source: str | Path | Mapping[str, Any]) -> EntityPool:
        data = read_json_source(source)
        document = parse_document(data)
        return build_pool(document, rng=self.rng)
