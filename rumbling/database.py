"""SQLite storage for crawled page content."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Union

_SCHEMA = """
CREATE TABLE IF NOT EXISTS data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
)
"""

_INSERT_DATA = """
INSERT INTO data (url, content, created_at, updated_at) VALUES (
    ?,
    ?,
    datetime('now'),
    datetime('now')
)
"""

_RETRIEVE_DATA = "SELECT url, content FROM data WHERE url=?"


@dataclass(frozen=True)
class DataRow:
    """The url and content of one stored page."""

    url: str
    content: str


@dataclass(frozen=True)
class Datum:
    """A full record of the data table."""

    id: int
    url: str
    content: str
    created_at: datetime
    updated_at: datetime


class Queries:
    """The queries the application runs against its database."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self.db = db

    def insert_data(self, url: str, content: str) -> None:
        """Store the cleaned content of a page."""
        with self.db:
            self.db.execute(_INSERT_DATA, (url, content))

    def retrieve_data(self, url: str) -> DataRow:
        """Return the stored content for a url; raise LookupError if absent."""
        row = self.db.execute(_RETRIEVE_DATA, (url,)).fetchone()
        if row is None:
            raise LookupError(f"no data stored for {url!r}")
        return DataRow(url=row[0], content=row[1])


def connect(path: Union[str, os.PathLike]) -> Queries:
    """Open (creating if needed) the database at path and return its queries."""
    conn = sqlite3.connect(os.fspath(path), check_same_thread=False)
    with conn:
        conn.execute(_SCHEMA)
    return Queries(conn)