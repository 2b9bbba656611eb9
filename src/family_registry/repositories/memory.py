"""Dict-backed repositories for tests and local runs."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import replace

from family_registry.domain.families import BasicService, Family, FamilyStatus


class InMemoryFamilyRepository:
    def __init__(self) -> None:
        self._rows: dict[int, Family] = {}
        self._next_id = 1

    async def get(self, family_id: int) -> Family | None:
        row = self._rows.get(family_id)
        return replace(row) if row is not None else None

    async def save(self, family: Family) -> Family:
        stored = replace(family)
        if stored.id is None:
            stored.id = self._next_id
            self._next_id += 1
        else:
            self._next_id = max(self._next_id, stored.id + 1)
        self._rows[stored.id] = stored
        return replace(stored)

    async def list_by_status(self, status: FamilyStatus) -> AsyncIterator[Family]:
        matching = [row for row in self._rows.values() if row.status == status]
        for row in sorted(matching, key=lambda f: f.id or 0):
            yield replace(row)

    def __len__(self) -> int:
        return len(self._rows)


class InMemoryBasicServiceRepository:
    def __init__(self) -> None:
        self._rows: dict[int, BasicService] = {}
        self._next_id = 1

    async def get(self, service_id: int) -> BasicService | None:
        row = self._rows.get(service_id)
        return replace(row) if row is not None else None

    async def save(self, service: BasicService) -> BasicService:
        stored = replace(service)
        if stored.service_id is None:
            stored.service_id = self._next_id
            self._next_id += 1
        else:
            self._next_id = max(self._next_id, stored.service_id + 1)
        self._rows[stored.service_id] = stored
        return replace(stored)

    def __len__(self) -> int:
        return len(self._rows)
