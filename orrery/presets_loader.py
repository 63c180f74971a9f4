#!/usr/bin/env python3
"""
Planet data sources: a flat text file and an SQLite database.

Both sources hand out an ordered list of PlanetRecord and support appending one
record and removing one record by its position in that order. After either
mutation the caller must reload the planet list and re-resolve moon parents,
since indices shift.

Text format (data/*.txt)
========================
One planet per line, seven whitespace-separated fields:

    <name> <orbitRadius> <angularSpeed> <radius> <r> <g> <b>
    Earth 220 0.010 12 100 149 237

- Lines starting with '#' or shorter than 5 characters are comments/blank.
- Lines that do not parse as exactly seven valid fields are skipped, not fatal.
- Records keep file order.

SQLite schema (*.db)
====================
    CREATE TABLE planets (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT,
        orbit_radius REAL NOT NULL,
        angular_speed REAL NOT NULL,
        radius REAL NOT NULL,
        color_r INTEGER NOT NULL,
        color_g INTEGER NOT NULL,
        color_b INTEGER NOT NULL,
        texture_url TEXT
    )

- Records are ordered by orbit_radius ascending (rowid breaks ties).
- A NULL name becomes "Planet<n>" where n is the row's position.
"""
import logging
import os
import sqlite3
import tempfile
from contextlib import closing
from typing import Iterable, List, Optional, Protocol, Tuple

from .constants import SQLITE_SUFFIXES
from .data_models import PlanetRecord
from .utils import try_float, try_int

logger = logging.getLogger(__name__)

FIELD_COUNT = 7


class DataSourceError(RuntimeError):
    """The data source exists but cannot be read or written."""


class PlanetSource(Protocol):
    def load(self) -> List[PlanetRecord]: ...

    def append(self, record: PlanetRecord) -> None: ...

    def remove(self, index: int) -> None: ...


# -----------------------
# Flat text format
# -----------------------

def _is_comment(line: str) -> bool:
    stripped = line.strip()
    return len(stripped) < 5 or stripped.startswith("#")


def parse_planet_line(line: str) -> Optional[PlanetRecord]:
    """Parse one data line; None for comments, blanks and malformed lines."""
    if _is_comment(line):
        return None
    fields = line.split()
    if len(fields) != FIELD_COUNT:
        logger.debug("Skipping line with %d fields: %r", len(fields), line.rstrip())
        return None
    name = fields[0]
    orbit, speed, radius = (try_float(v) for v in fields[1:4])
    r, g, b = (try_int(v) for v in fields[4:7])
    if None in (orbit, speed, radius, r, g, b):
        logger.debug("Skipping unparsable line: %r", line.rstrip())
        return None
    record = PlanetRecord(name, orbit, speed, radius, (r, g, b))
    try:
        record.validate()
    except ValueError as exc:
        logger.debug("Skipping invalid record: %s", exc)
        return None
    return record


def format_planet_line(record: PlanetRecord) -> str:
    r, g, b = record.color
    return (f"{record.name} {record.orbit_radius:.4f} {record.angular_speed:.6f} "
            f"{record.radius:.4f} {int(r)} {int(g)} {int(b)}")


class TextPlanetSource:
    """Line-oriented planet file. A missing file reads as an empty list."""

    def __init__(self, path: str):
        self.path = path

    def __repr__(self) -> str:
        return f"TextPlanetSource({self.path!r})"

    def _read_lines(self) -> List[str]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return f.readlines()
        except OSError as exc:
            raise DataSourceError(f"Cannot read {self.path}: {exc}") from exc

    def load(self) -> List[PlanetRecord]:
        records = []
        for line in self._read_lines():
            record = parse_planet_line(line)
            if record is not None:
                records.append(record)
        logger.info("Loaded %d planets from %s.", len(records), self.path)
        return records

    def append(self, record: PlanetRecord) -> None:
        record.validate()
        lines = self._read_lines()
        prefix = "" if not lines or lines[-1].endswith("\n") else "\n"
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(prefix + format_planet_line(record) + "\n")
        except OSError as exc:
            raise DataSourceError(f"Cannot write {self.path}: {exc}") from exc

    def remove(self, index: int) -> None:
        """Rewrite the file without the index-th record; comments and unparsed lines stay."""
        lines = self._read_lines()
        kept: List[str] = []
        seen = 0
        removed = False
        for line in lines:
            if parse_planet_line(line) is not None:
                if seen == index:
                    removed = True
                    seen += 1
                    continue
                seen += 1
            kept.append(line)
        if index < 0 or not removed:
            raise IndexError(f"No planet record at index {index} (have {seen})")
        self._write_lines(kept)

    def _write_lines(self, lines: Iterable[str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".planets-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.writelines(lines)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise DataSourceError(f"Cannot rewrite {self.path}: {exc}") from exc


# -----------------------
# SQLite
# -----------------------

_SCHEMA = """
CREATE TABLE IF NOT EXISTS planets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT,
    orbit_radius REAL NOT NULL,
    angular_speed REAL NOT NULL,
    radius REAL NOT NULL,
    color_r INTEGER NOT NULL,
    color_g INTEGER NOT NULL,
    color_b INTEGER NOT NULL,
    texture_url TEXT
)
"""

_SELECT = (
    "SELECT rowid, name, orbit_radius, angular_speed, radius, "
    "       color_r, color_g, color_b, texture_url "
    "FROM planets "
    "ORDER BY orbit_radius ASC, rowid ASC"
)


class SqlitePlanetSource:
    """Planets table in an SQLite database, ordered by orbit radius."""

    def __init__(self, path: str):
        self.path = path

    def __repr__(self) -> str:
        return f"SqlitePlanetSource({self.path!r})"

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.path)
        except sqlite3.Error as exc:
            raise DataSourceError(f"Failed to open database '{self.path}': {exc}") from exc

    def create_schema(self) -> None:
        with closing(self._connect()) as conn, conn:
            conn.execute(_SCHEMA)

    def seed(self, records: Iterable[PlanetRecord]) -> None:
        self.create_schema()
        for record in records:
            self.append(record)

    @staticmethod
    def _valid_rows(conn: sqlite3.Connection) -> List[Tuple[int, PlanetRecord]]:
        """(rowid, record) pairs in load order; invalid rows are dropped."""
        out: List[Tuple[int, PlanetRecord]] = []
        for n, row in enumerate(conn.execute(_SELECT).fetchall()):
            rowid, name, orbit, speed, radius, r, g, b, url = row
            try:
                record = PlanetRecord(
                    name=name or f"Planet{n}",
                    orbit_radius=float(orbit),
                    angular_speed=float(speed),
                    radius=float(radius),
                    color=(int(r), int(g), int(b)),
                    texture_url=url or None,
                )
                record.validate()
            except (TypeError, ValueError) as exc:
                logger.debug("Skipping invalid row %d: %s", n, exc)
                continue
            out.append((rowid, record))
        return out

    def load(self) -> List[PlanetRecord]:
        try:
            with closing(self._connect()) as conn:
                records = [record for _, record in self._valid_rows(conn)]
        except sqlite3.Error as exc:
            raise DataSourceError(f"Query failed on '{self.path}': {exc}") from exc
        logger.info("Loaded %d planets from DB %s.", len(records), self.path)
        return records

    def append(self, record: PlanetRecord) -> None:
        record.validate()
        r, g, b = record.color
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT INTO planets (name, orbit_radius, angular_speed, radius, "
                    "color_r, color_g, color_b, texture_url) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (record.name, record.orbit_radius, record.angular_speed, record.radius,
                     int(r), int(g), int(b), record.texture_url),
                )
        except sqlite3.Error as exc:
            raise DataSourceError(f"Insert failed on '{self.path}': {exc}") from exc

    def remove(self, index: int) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                rowids = [rowid for rowid, _ in self._valid_rows(conn)]
                if not 0 <= index < len(rowids):
                    raise IndexError(f"No planet record at index {index} (have {len(rowids)})")
                conn.execute("DELETE FROM planets WHERE rowid = ?", (rowids[index],))
        except sqlite3.Error as exc:
            raise DataSourceError(f"Delete failed on '{self.path}': {exc}") from exc


def open_source(path: str) -> PlanetSource:
    """Pick a source implementation from the file extension."""
    if path.lower().endswith(SQLITE_SUFFIXES):
        return SqlitePlanetSource(path)
    return TextPlanetSource(path)
