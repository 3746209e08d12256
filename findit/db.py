"""Symbol database loading and process-wide access for findit-engine."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from findit.symbols import Database, is_internal_category

logger = logging.getLogger("findit.db")

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_DATABASE_PATH = Path(__file__).resolve().parent / "data" / "symbols.json"


def database_path() -> Path:
    return Path(os.environ.get("FI_DATABASE_PATH", str(DEFAULT_DATABASE_PATH)))


# ---------------------------------------------------------------------------
# Process-wide database
# ---------------------------------------------------------------------------

_database: Database | None = None


def load_database(path: Path) -> Database:
    """Read a compiled database file."""
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    return Database.from_dict(data)


def init_database(path: Path | None = None) -> Database:
    """Load the compiled database once for this process."""
    global _database
    path = path or database_path()
    _database = load_database(path)
    logger.info("Loaded %d symbols from %s", len(_database), path)
    return _database


def close_database() -> None:
    global _database
    _database = None


def get_database() -> Database:
    """Return the database, raising if not initialized."""
    if _database is None:
        raise RuntimeError("Symbol database not initialized")
    return _database


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

def get_stats(database: Database) -> dict:
    """Aggregate counts for the metrics endpoint."""
    public = database.public_categories()
    return {
        "total_symbols": len(database),
        "total_categories": len(public),
        "internal_categories": sum(
            1 for name, _ in database.categories if is_internal_category(name)
        ),
        "total_names": len(database.name_to_symbol),
        "symbols_by_category": dict(public),
    }
