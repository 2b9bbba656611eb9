"""Tests for the in-memory and SQLite store backends."""

import pytest

from family_registry.domain.families import BasicService, Family, FamilyStatus
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


@pytest.fixture
def db() -> SQLiteDatabase:
    database = SQLiteDatabase(":memory:")
    database.initialize()
    yield database
    database.close()


@pytest.fixture(params=["memory", "sqlite"])
def repos(request, db: SQLiteDatabase) -> tuple[FamilyRepository, BasicServiceRepository]:
    if request.param == "memory":
        return InMemoryFamilyRepository(), InMemoryBasicServiceRepository()
    return SQLiteFamilyRepository(db), SQLiteBasicServiceRepository(db)


async def _collect(repo: FamilyRepository, status: FamilyStatus) -> list[Family]:
    return [f async for f in repo.list_by_status(status)]


class TestProtocolConformance:
    def test_backends_satisfy_store_protocols(self, db: SQLiteDatabase):
        assert isinstance(InMemoryFamilyRepository(), FamilyRepository)
        assert isinstance(SQLiteFamilyRepository(db), FamilyRepository)
        assert isinstance(InMemoryBasicServiceRepository(), BasicServiceRepository)
        assert isinstance(SQLiteBasicServiceRepository(db), BasicServiceRepository)


class TestFamilyRepository:
    @pytest.mark.asyncio
    async def test_save_assigns_id_and_get_returns_it(self, repos, sample_family: Family):
        family_repo, _ = repos

        saved = await family_repo.save(sample_family)
        retrieved = await family_repo.get(saved.id)

        assert saved.id is not None
        assert retrieved == saved
        assert retrieved.last_name == "Quispe"
        assert retrieved.number_members == 5
        assert retrieved.status == FamilyStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_ids_increase(self, repos):
        family_repo, _ = repos

        first = await family_repo.save(Family(last_name="A"))
        second = await family_repo.save(Family(last_name="B"))

        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_get_nonexistent_returns_none(self, repos):
        family_repo, _ = repos

        assert await family_repo.get(404) is None

    @pytest.mark.asyncio
    async def test_save_existing_overwrites(self, repos, sample_family: Family):
        family_repo, _ = repos
        saved = await family_repo.save(sample_family)

        saved.last_name = "Mamani"
        saved.deactivate()
        await family_repo.save(saved)
        retrieved = await family_repo.get(saved.id)

        assert retrieved.last_name == "Mamani"
        assert retrieved.status == FamilyStatus.INACTIVE

    @pytest.mark.asyncio
    async def test_save_with_explicit_id(self, repos):
        family_repo, _ = repos

        saved = await family_repo.save(Family(id=7, last_name="Ruiz"))
        following = await family_repo.save(Family(last_name="Next"))

        assert saved.id == 7
        assert (await family_repo.get(7)).last_name == "Ruiz"
        assert following.id > 7

    @pytest.mark.asyncio
    async def test_returned_records_are_detached(self, repos, sample_family: Family):
        family_repo, _ = repos
        saved = await family_repo.save(sample_family)

        saved.last_name = "Changed locally"
        retrieved = await family_repo.get(saved.id)

        assert retrieved.last_name == "Quispe"

    @pytest.mark.asyncio
    async def test_list_by_status_filters_and_orders(self, repos):
        family_repo, _ = repos
        for name, status in [
            ("One", FamilyStatus.ACTIVE),
            ("Two", FamilyStatus.INACTIVE),
            ("Three", FamilyStatus.ACTIVE),
            ("Four", FamilyStatus.ACTIVE),
        ]:
            await family_repo.save(Family(last_name=name, status=status))

        active = await _collect(family_repo, FamilyStatus.ACTIVE)
        inactive = await _collect(family_repo, FamilyStatus.INACTIVE)

        assert [f.last_name for f in active] == ["One", "Three", "Four"]
        assert [f.id for f in active] == sorted(f.id for f in active)
        assert [f.last_name for f in inactive] == ["Two"]

    @pytest.mark.asyncio
    async def test_list_by_status_is_restartable(self, repos):
        family_repo, _ = repos
        await family_repo.save(Family(last_name="Only"))

        first = await _collect(family_repo, FamilyStatus.ACTIVE)
        second = await _collect(family_repo, FamilyStatus.ACTIVE)

        assert first == second
        assert len(first) == 1


class TestBasicServiceRepository:
    @pytest.mark.asyncio
    async def test_save_and_get(self, repos, sample_service: BasicService):
        _, service_repo = repos

        saved = await service_repo.save(sample_service)
        retrieved = await service_repo.get(saved.service_id)

        assert saved.service_id is not None
        assert retrieved == saved
        assert retrieved.water_service == "Yes"
        assert retrieved.reference_location == "Near the market"

    @pytest.mark.asyncio
    async def test_empty_service_gets_an_id(self, repos):
        _, service_repo = repos

        saved = await service_repo.save(BasicService())

        assert saved.service_id is not None
        assert saved.water_service is None

    @pytest.mark.asyncio
    async def test_update_in_place(self, repos, sample_service: BasicService):
        _, service_repo = repos
        saved = await service_repo.save(sample_service)

        saved.water_service = "No"
        await service_repo.save(saved)

        assert (await service_repo.get(saved.service_id)).water_service == "No"

    @pytest.mark.asyncio
    async def test_get_nonexistent_returns_none(self, repos):
        _, service_repo = repos

        assert await service_repo.get(12345) is None


class TestSQLiteSpecifics:
    @pytest.mark.asyncio
    async def test_linked_service_can_be_updated(self, db: SQLiteDatabase):
        service_repo = SQLiteBasicServiceRepository(db)
        family_repo = SQLiteFamilyRepository(db)
        service = await service_repo.save(BasicService(water_service="Yes"))
        await family_repo.save(Family(last_name="Linked", service_id=service.service_id))

        service.water_service = "No"
        await service_repo.save(service)

        assert (await service_repo.get(service.service_id)).water_service == "No"

    def test_initialize_is_idempotent(self, db: SQLiteDatabase):
        db.initialize()
        tables = {
            row["name"]
            for row in db.get_connection()
            .execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            .fetchall()
        }

        assert {"families", "services_and_environment"} <= tables

    @pytest.mark.asyncio
    async def test_data_survives_reopen(self, tmp_path):
        path = tmp_path / "registry.db"
        first = SQLiteDatabase(path)
        first.initialize()
        saved = await SQLiteFamilyRepository(first).save(Family(last_name="Persisted"))
        first.close()

        second = SQLiteDatabase(path)
        second.initialize()
        retrieved = await SQLiteFamilyRepository(second).get(saved.id)
        second.close()

        assert retrieved is not None
        assert retrieved.last_name == "Persisted"
