"""
Lumenplan Fixture Catalog

SQLite-based catalog of lamp/fixture types used to look up the
electrical load behind a given luminous flux.

Features:
- Seeded with common incandescent, fluorescent, LED and halogen lamps
- Lookup by key or by exact flux value
- Search by type and flux range
- In-memory by default, file-backed when given a path
"""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


@dataclass
class FixtureRecord:
    """A fixture type in the catalog."""
    key: str
    label: str
    flux_lm: float
    wattage_w: float
    fixture_type: str = ""
    id: Optional[int] = None

    @property
    def efficacy(self) -> float:
        """lm/W"""
        return self.flux_lm / self.wattage_w if self.wattage_w > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["efficacy"] = self.efficacy
        return d

    @staticmethod
    def from_row(row: sqlite3.Row) -> "FixtureRecord":
        return FixtureRecord(
            id=row["id"],
            key=row["key"],
            label=row["label"],
            flux_lm=row["flux_lm"],
            wattage_w=row["wattage_w"],
            fixture_type=row["fixture_type"],
        )


DEFAULT_FIXTURES = (
    FixtureRecord("incandescent-60w", "Incandescent (60W)", 800, 60, "Incandescent"),
    FixtureRecord("incandescent-100w", "Incandescent (100W)", 1600, 100, "Incandescent"),
    FixtureRecord("fluorescent-t8-32w", "Fluorescent T8 (32W)", 2400, 32, "Fluorescent"),
    FixtureRecord("fluorescent-t5-28w", "Fluorescent T5 (28W)", 2800, 28, "Fluorescent"),
    FixtureRecord("led-9w", "LED Bulb (9W)", 800, 9, "LED"),
    FixtureRecord("led-12w", "LED Bulb (12W)", 1100, 12, "LED"),
    FixtureRecord("led-panel-36w", "LED Panel (36W)", 3600, 36, "LED"),
    FixtureRecord("halogen-50w", "Halogen (50W)", 900, 50, "Halogen"),
    FixtureRecord("halogen-100w", "Halogen (100W)", 1800, 100, "Halogen"),
)


class FixtureCatalog:
    """SQLite-based fixture catalog."""

    def __init__(self, db_path: Union[str, Path] = ":memory:"):
        self.db_path = str(db_path)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self):
        self.conn.execute('''
            CREATE TABLE IF NOT EXISTS fixtures (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                key TEXT UNIQUE NOT NULL,
                label TEXT,
                flux_lm REAL,
                wattage_w REAL,
                fixture_type TEXT
            )
        ''')
        self.conn.execute('''
            CREATE INDEX IF NOT EXISTS idx_flux
            ON fixtures(flux_lm)
        ''')
        self.conn.commit()

    def add(self, record: FixtureRecord) -> int:
        """Add a fixture; keys are unique."""
        if record.flux_lm <= 0:
            raise ValueError(f"Fixture {record.key} must have positive flux")
        if record.wattage_w < 0:
            raise ValueError(f"Fixture {record.key} cannot have negative wattage")
        cursor = self.conn.execute(
            'INSERT INTO fixtures (key, label, flux_lm, wattage_w, fixture_type) VALUES (?, ?, ?, ?, ?)',
            (record.key, record.label, float(record.flux_lm), float(record.wattage_w), record.fixture_type),
        )
        self.conn.commit()
        return cursor.lastrowid

    def get(self, key: str) -> Optional[FixtureRecord]:
        row = self.conn.execute(
            'SELECT * FROM fixtures WHERE key = ?', (key,)
        ).fetchone()
        if row:
            return FixtureRecord.from_row(row)
        return None

    def find_by_flux(self, flux_lm: float) -> Optional[FixtureRecord]:
        """Exact flux match; the lowest-wattage fixture wins when several share a flux."""
        row = self.conn.execute(
            'SELECT * FROM fixtures WHERE flux_lm = ? ORDER BY wattage_w, id LIMIT 1',
            (float(flux_lm),),
        ).fetchone()
        if row:
            return FixtureRecord.from_row(row)
        return None

    def search(
        self,
        fixture_type: Optional[str] = None,
        min_flux: Optional[float] = None,
        max_flux: Optional[float] = None,
        limit: int = 100,
    ) -> List[FixtureRecord]:
        query = 'SELECT * FROM fixtures WHERE 1=1'
        params: List[Any] = []

        if fixture_type:
            query += ' AND fixture_type LIKE ?'
            params.append(f'%{fixture_type}%')

        if min_flux is not None:
            query += ' AND flux_lm >= ?'
            params.append(min_flux)

        if max_flux is not None:
            query += ' AND flux_lm <= ?'
            params.append(max_flux)

        query += ' ORDER BY id LIMIT ?'
        params.append(int(limit))

        rows = self.conn.execute(query, params).fetchall()
        return [FixtureRecord.from_row(r) for r in rows]

    def list_all(self) -> List[FixtureRecord]:
        rows = self.conn.execute('SELECT * FROM fixtures ORDER BY id').fetchall()
        return [FixtureRecord.from_row(r) for r in rows]

    def count(self) -> int:
        return self.conn.execute('SELECT COUNT(*) FROM fixtures').fetchone()[0]

    def delete(self, key: str) -> bool:
        cursor = self.conn.execute('DELETE FROM fixtures WHERE key = ?', (key,))
        self.conn.commit()
        return cursor.rowcount > 0

    def close(self):
        self.conn.close()


def default_catalog(db_path: Union[str, Path] = ":memory:") -> FixtureCatalog:
    """Catalog holding the built-in lamp types (skips keys already present)."""
    catalog = FixtureCatalog(db_path)
    for record in DEFAULT_FIXTURES:
        if catalog.get(record.key) is None:
            catalog.add(FixtureRecord(**{k: v for k, v in asdict(record).items() if k != "id"}))
    return catalog
