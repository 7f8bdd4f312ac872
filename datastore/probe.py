"""Startup reachability check for the configured SQLite data store."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from urllib.request import pathname2url

from configuration.resolver import Configuration
from models.errors import DatabaseProblemException

logger = logging.getLogger(__name__)

SQLITE_SCHEME = "sqlite:///"


def database_path(location: str) -> Path:
    """Return the filesystem path addressed by a ``sqlite:///`` location."""
    candidate = location.strip()
    if not candidate.startswith(SQLITE_SCHEME):
        raise DatabaseProblemException(
            f"Data store location {location!r} is not a {SQLITE_SCHEME} URL."
        )
    raw_path = candidate[len(SQLITE_SCHEME) :]
    if not raw_path:
        raise DatabaseProblemException(
            f"Data store location {location!r} does not name a database file."
        )
    return Path(raw_path)


class DataStoreProbe:
    """Opens the configured database read-only and confirms it is usable."""

    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout

    def probe(self, config: Configuration) -> None:
        path = database_path(config.db_location)
        uri = f"file:{pathname2url(str(path))}?mode=ro"
        try:
            with closing(sqlite3.connect(uri, uri=True, timeout=self.timeout)) as connection:
                connection.execute("PRAGMA schema_version").fetchone()
        except sqlite3.Error as exc:
            logger.error(
                "Data store probe failed",
                extra={"db_location": config.db_location, "reason": str(exc)},
            )
            raise DatabaseProblemException(
                f"Data store {config.db_location!r} is not usable: {exc}"
            ) from exc

        logger.info("Data store reachable", extra={"db_location": config.db_location})
