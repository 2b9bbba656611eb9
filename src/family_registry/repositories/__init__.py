from family_registry.repositories.interfaces import (
    BasicServiceRepository,
    FamilyRepository,
)
from family_registry.repositories.memory import (
    InMemoryBasicServiceRepository,
    InMemoryFamilyRepository,
)
from family_registry.repositories.sqlite import (
    SQLiteBasicServiceRepository,
    SQLiteDatabase,
    SQLiteFamilyRepository,
)

__all__ = [
    "BasicServiceRepository",
    "FamilyRepository",
    "InMemoryBasicServiceRepository",
    "InMemoryFamilyRepository",
    "SQLiteBasicServiceRepository",
    "SQLiteDatabase",
    "SQLiteFamilyRepository",
]
