"""
Data Loader - Interface for turning a dataset source into an EntityPool.

Each source format (JSON document, SQLite database) has one concrete
loader. Loaders share the record -> pool conversion below, which decides
the dataset mode and enforces pool-level invariants:
- at least one pick
- unique pick ids
- a single attribute shape (facts or properties, never both)
"""

from __future__ import annotations
import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Mapping

from pydantic import ValidationError

from ..engine_core.entities import DatasetMode
from ..engine_core.entity_store import EntityPool
from ..errors import DataFormatError
from .records import DatasetDocument

logger = logging.getLogger(__name__)


class DataLoader(ABC):
    """
    Abstract base class for dataset loaders.

    Usage:
        loader = JSONLoader()
        pool = loader.load("data/example-data.json")
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng

    @abstractmethod
    def load(self, source: Any) -> EntityPool:
        """
        Load a dataset into an entity pool.

        Raises:
            DataFormatError: if the source is unreadable, malformed or empty
        """
        pass


def format_validation_errors(error: ValidationError) -> list[str]:
    """Flatten pydantic errors into 'picks.0.name: Field required' strings."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return messages


def parse_document(data: Any) -> DatasetDocument:
    """Validate raw data against the dataset schema."""
    if not isinstance(data, Mapping):
        raise DataFormatError("Dataset must be an object with a 'picks' list")
    try:
        return DatasetDocument.model_validate(data)
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise DataFormatError(
            f"Dataset failed validation with {len(errors)} error(s)", errors
        ) from e


def detect_mode(document: DatasetDocument) -> DatasetMode:
    """Decide the dataset mode from which attribute shape the records use."""
    uses_facts = any(record.facts is not None for record in document.picks)
    uses_properties = any(record.properties is not None for record in document.picks)

    if uses_facts and uses_properties:
        raise DataFormatError("Dataset mixes 'facts' and 'properties' records")
    if uses_facts:
        return DatasetMode.DISCRETE
    if uses_properties:
        return DatasetMode.NUMERIC
    raise DataFormatError("Dataset picks carry neither 'facts' nor 'properties'")


def build_pool(document: DatasetDocument, rng: random.Random | None = None) -> EntityPool:
    """Convert a validated document into an EntityPool."""
    mode = detect_mode(document)

    seen: set[str] = set()
    duplicates: list[str] = []
    for record in document.picks:
        if record.id in seen:
            duplicates.append(record.id)
        seen.add(record.id)
    if duplicates:
        raise DataFormatError(
            "Duplicate pick id(s)",
            [f"Duplicate pick id: {pick_id}" for pick_id in duplicates],
        )

    picks = [record.to_pick() for record in document.picks]
    without_attributes = sum(1 for pick in picks if not pick.has_attributes)
    if without_attributes:
        logger.warning(
            "%d pick(s) carry no attributes and will never be a correct answer",
            without_attributes,
        )

    pool = EntityPool(
        picks,
        mode=mode,
        rng=rng,
        property_categories=document.category_images(),
    )
    logger.info(
        "Loaded %d pick(s) in %s mode (%d distinct fact(s))",
        len(pool), mode.value, len(pool.facts),
    )
    return pool
