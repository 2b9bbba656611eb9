"""Store contracts consumed by the family aggregate manager.

Backends satisfy these structurally; no base class is required.
"""

from collections.abc import AsyncIterator
from typing import Protocol, runtime_checkable

from family_registry.domain.families import BasicService, Family, FamilyStatus


@runtime_checkable
class FamilyRepository(Protocol):
    async def get(self, family_id: int) -> Family | None:
        """Return the family with this id, or None."""
        ...

    async def save(self, family: Family) -> Family:
        """Insert when ``family.id`` is None, otherwise overwrite. Returns the stored record."""
        ...

    def list_by_status(self, status: FamilyStatus) -> AsyncIterator[Family]:
        """Yield every family with ``status`` in ascending id order."""
        ...


@runtime_checkable
class BasicServiceRepository(Protocol):
    async def get(self, service_id: int) -> BasicService | None:
        """Return the basic service with this id, or None."""
        ...

    async def save(self, service: BasicService) -> BasicService:
        """Insert when ``service.service_id`` is None, otherwise overwrite."""
        ...
