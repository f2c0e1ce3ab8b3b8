"""
Loaders - Dataset sources for the entity pool.

One loader per source format, all behind the DataLoader interface:
- JSONLoader: JSON file or parsed mapping
- SQLiteLoader: SQLite database file

validate_dataset() performs the same checks without building a pool and
reports every problem at once, for dataset authors.
"""

from .base import DataLoader, build_pool, detect_mode, parse_document
from .json_loader import JSONLoader, read_json_source
from .sqlite_loader import SQLiteLoader
from .records import DatasetDocument, FactRecord, PickRecord
from .validation import ValidationResult, validate_dataset


def loader_for(path: str) -> DataLoader:
    """Pick a loader from the file extension (.db/.sqlite -> SQLite, else JSON)."""
    if str(path).lower().endswith((".db", ".sqlite", ".sqlite3")):
        return SQLiteLoader()
    return JSONLoader()


def read_raw_dataset(path: str):
    """Raw dataset contents for validate_dataset(), from JSON or SQLite."""
    loader = loader_for(path)
    if isinstance(loader, SQLiteLoader):
        return loader.read_document(path)
    return read_json_source(path)


__all__ = [
    "DataLoader",
    "build_pool",
    "detect_mode",
    "parse_document",
    "JSONLoader",
    "read_json_source",
    "SQLiteLoader",
    "DatasetDocument",
    "FactRecord",
    "PickRecord",
    "ValidationResult",
    "validate_dataset",
    "loader_for",
    "read_raw_dataset",
]
