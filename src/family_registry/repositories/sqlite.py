"""SQLite implementations of the store contracts."""

from __future__ import annotations

import sqlite3
from collections.abc import AsyncIterator
from pathlib import Path

from family_registry.domain.families import (
    BASIC_SERVICE_FIELDS,
    FAMILY_DESCRIPTIVE_FIELDS,
    BasicService,
    Family,
    FamilyStatus,
)


class SQLiteDatabase:
    """SQLite database connection manager."""

    def __init__(
        self, path: str | Path = ":memory:", check_same_thread: bool = True
    ) -> None:
        self._path = str(path)
        self._check_same_thread = check_same_thread
        self._connection: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._path

    def get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._connection is None:
            self._connection = sqlite3.connect(
                self._path, check_same_thread=self._check_same_thread
            )
            self._connection.row_factory = sqlite3.Row
            # Enable foreign keys
            self._connection.execute("PRAGMA foreign_keys = ON")
        return self._connection

    def initialize(self) -> None:
        """Create all database tables."""
        conn = self.get_connection()
        conn.executescript(
            """
            -- Basic services table
            CREATE TABLE IF NOT EXISTS services_and_environment (
                service_id INTEGER PRIMARY KEY AUTOINCREMENT,
                water_service TEXT,
                serv_drain TEXT,
                serv_light TEXT,
                serv_cable TEXT,
                serv_gas TEXT,
                area TEXT,
                reference_location TEXT,
                residue TEXT,
                public_lighting TEXT,
                security TEXT,
                material TEXT,
                feeding TEXT,
                economic TEXT,
                spiritual TEXT,
                social_company TEXT,
                guide_tip TEXT
            );

            -- Families table
            CREATE TABLE IF NOT EXISTS families (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                last_name TEXT,
                direction TEXT,
                reasib_admission TEXT,
                number_members INTEGER,
                number_children INTEGER,
                family_type TEXT,
                social_problems TEXT,
                weekly_frequency TEXT,
                feeding_type TEXT,
                safe_type TEXT,
                family_disease TEXT,
                treatment TEXT,
                disease_history TEXT,
                medical_exam TEXT,
                tenure TEXT,
                type_of_housing TEXT,
                housing_material TEXT,
                housing_security TEXT,
                home_environment INTEGER,
                bedroom_number INTEGER,
                habitability TEXT,
                number_rooms INTEGER,
                number_of_bedrooms INTEGER,
                habitability_building TEXT,
                status TEXT NOT NULL DEFAULT 'A' CHECK (status IN ('A', 'I')),
                service_id INTEGER,
                FOREIGN KEY (service_id) REFERENCES services_and_environment(service_id)
            );
            CREATE INDEX IF NOT EXISTS idx_families_status ON families(status);
            """
        )
        conn.commit()

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None


class SQLiteFamilyRepository:
    _COLUMNS = (*FAMILY_DESCRIPTIVE_FIELDS, "status", "service_id")

    def __init__(self, database: SQLiteDatabase) -> None:
        self._db = database

    async def get(self, family_id: int) -> Family | None:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM families WHERE id = ?", (family_id,)
        ).fetchone()
        if row is None:
            return None
        return self._row_to_family(row)

    async def save(self, family: Family) -> Family:
        conn = self._db.get_connection()
        values = [self._column_value(family, name) for name in self._COLUMNS]
        if family.id is None:
            placeholders = ", ".join("?" for _ in self._COLUMNS)
            cursor = conn.execute(
                f"INSERT INTO families ({', '.join(self._COLUMNS)}) VALUES ({placeholders})",
                values,
            )
            family_id = cursor.lastrowid
        else:
            assignments = ", ".join(f"{name} = ?" for name in self._COLUMNS)
            cursor = conn.execute(
                f"UPDATE families SET {assignments} WHERE id = ?",
                [*values, family.id],
            )
            if cursor.rowcount == 0:
                columns = ("id", *self._COLUMNS)
                placeholders = ", ".join("?" for _ in columns)
                conn.execute(
                    f"INSERT INTO families ({', '.join(columns)}) VALUES ({placeholders})",
                    [family.id, *values],
                )
            family_id = family.id
        conn.commit()
        saved = await self.get(family_id)
        assert saved is not None
        return saved

    async def list_by_status(self, status: FamilyStatus) -> AsyncIterator[Family]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM families WHERE status = ? ORDER BY id ASC",
            (FamilyStatus(status).value,),
        ).fetchall()
        for row in rows:
            yield self._row_to_family(row)

    @staticmethod
    def _column_value(family: Family, name: str) -> object:
        value = getattr(family, name)
        if name == "status":
            return FamilyStatus(value).value
        return value

    def _row_to_family(self, row: sqlite3.Row) -> Family:
        values = {name: row[name] for name in FAMILY_DESCRIPTIVE_FIELDS}
        return Family(
            id=row["id"],
            status=FamilyStatus(row["status"]),
            service_id=row["service_id"],
            **values,
        )


class SQLiteBasicServiceRepository:
    def __init__(self, database: SQLiteDatabase) -> None:
        self._db = database

    async def get(self, service_id: int) -> BasicService | None:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM services_and_environment WHERE service_id = ?",
            (service_id,),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_service(row)

    async def save(self, service: BasicService) -> BasicService:
        conn = self._db.get_connection()
        values = [getattr(service, name) for name in BASIC_SERVICE_FIELDS]
        if service.service_id is None:
            placeholders = ", ".join("?" for _ in BASIC_SERVICE_FIELDS)
            cursor = conn.execute(
                f"INSERT INTO services_and_environment ({', '.join(BASIC_SERVICE_FIELDS)}) "
                f"VALUES ({placeholders})",
                values,
            )
            service_id = cursor.lastrowid
        else:
            assignments = ", ".join(f"{name} = ?" for name in BASIC_SERVICE_FIELDS)
            cursor = conn.execute(
                f"UPDATE services_and_environment SET {assignments} WHERE service_id = ?",
                [*values, service.service_id],
            )
            if cursor.rowcount == 0:
                columns = ("service_id", *BASIC_SERVICE_FIELDS)
                placeholders = ", ".join("?" for _ in columns)
                conn.execute(
                    f"INSERT INTO services_and_environment ({', '.join(columns)}) "
                    f"VALUES ({placeholders})",
                    [service.service_id, *values],
                )
            service_id = service.service_id
        conn.commit()
        saved = await self.get(service_id)
        assert saved is not None
        return saved

    def _row_to_service(self, row: sqlite3.Row) -> BasicService:
        values = {name: row[name] for name in BASIC_SERVICE_FIELDS}
        return BasicService(service_id=row["service_id"], **values)
