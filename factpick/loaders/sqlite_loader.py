"""
SQLite Loader - Loads a dataset from a SQLite database file.

Expected tables:
- picks (id, name, image)
- properties (pick_id, property_name, value, image)       numeric mode
- facts (pick_id, description, category, quantity, image)  discrete mode
- property_categories (name, image)                       optional

A database with a `facts` table is loaded in discrete mode; otherwise the
`properties` table is used.
"""

from __future__ import annotations
import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any

from ..engine_core.entity_store import EntityPool
from ..errors import DataFormatError
from .base import DataLoader, build_pool, parse_document

logger = logging.getLogger(__name__)


class SQLiteLoader(DataLoader):
    """Loads picks and their attributes from SQLite tables."""

    def load(self, source: str | Path) -> EntityPool:
        document = self.read_document(source)
        return build_pool(parse_document(document), rng=self.rng)

    def read_document(self, source: str | Path) -> dict[str, Any]:
        """Read the tables into the same raw shape a JSON dataset has."""
        path = Path(source)
        if not path.exists():
            raise DataFormatError(f"Database file not found: {path}")

        logger.info("Reading dataset from SQLite database %s", path)
        try:
            with closing(sqlite3.connect(f"file:{path}?mode=ro", uri=True)) as conn:
                conn.row_factory = sqlite3.Row
                return self._read_document(conn)
        except sqlite3.DatabaseError as e:
            raise DataFormatError(f"Could not read database {path}: {e}") from e

    def _read_document(self, conn: sqlite3.Connection) -> dict[str, Any]:
        tables = self._table_names(conn)
        if "picks" not in tables:
            raise DataFormatError("Database has no 'picks' table")

        picks: dict[str, dict[str, Any]] = {}
        for row in conn.execute("SELECT * FROM picks"):
            columns = row.keys()
            pick_id = str(row["id"])
            picks[pick_id] = {
                "id": pick_id,
                "name": row["name"],
                "image": row["image"] if "image" in columns else None,
            }

        if "facts" in tables:
            self._attach_facts(conn, picks)
        elif "properties" in tables:
            self._attach_properties(conn, picks)

        categories = {}
        if "property_categories" in tables:
            for row in conn.execute("SELECT name, image FROM property_categories"):
                categories[row["name"]] = {"image": row["image"]}

        return {"picks": list(picks.values()), "propertyCategories": categories}

    def _attach_facts(self, conn: sqlite3.Connection, picks: dict[str, dict[str, Any]]):
        for pick in picks.values():
            pick["facts"] = []
        for row in conn.execute(
            "SELECT pick_id, description, category, quantity, image FROM facts"
        ):
            pick = picks.get(str(row["pick_id"]))
            if pick is None:
                logger.warning("Fact row references unknown pick %s", row["pick_id"])
                continue
            pick["facts"].append({
                "description": row["description"],
                "category": row["category"],
                "quantity": row["quantity"],
                "image": row["image"],
            })

    def _attach_properties(self, conn: sqlite3.Connection, picks: dict[str, dict[str, Any]]):
        for pick in picks.values():
            pick["properties"] = {}
            pick["propertyImages"] = {}
        for row in conn.execute(
            "SELECT pick_id, property_name, value, image FROM properties"
        ):
            pick = picks.get(str(row["pick_id"]))
            if pick is None:
                logger.warning("Property row references unknown pick %s", row["pick_id"])
                continue
            pick["properties"][row["property_name"]] = row["value"]
            if row["image"]:
                pick["propertyImages"][row["property_name"]] = row["image"]

    @staticmethod
    def _table_names(conn: sqlite3.Connection) -> set[str]:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        return {row["name"] for row in rows}
