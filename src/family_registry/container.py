"""Dependency injection container for Family Registry.

Builds the stores, the event sink and the aggregate manager from
settings, lazily and once.

Usage:
    from family_registry.container import get_container

    container = get_container()
    manager = container.family_manager
"""

from functools import cached_property
from typing import TYPE_CHECKING

from family_registry.config import (
    EventSinkType,
    Settings,
    StorageBackend,
    get_settings,
)
from family_registry.exceptions import ConfigurationError
from family_registry.logging_config import get_logger

if TYPE_CHECKING:
    from family_registry.repositories.interfaces import (
        BasicServiceRepository,
        FamilyRepository,
    )
    from family_registry.repositories.sqlite import SQLiteDatabase
    from family_registry.services.events import EventSink, FamilyEventPublisher
    from family_registry.services.families import FamilyAggregateManager

logger = get_logger(__name__)


class Container:
    """Dependency injection container.

    The container can be configured with custom settings for testing:

        test_settings = Settings(storage_backend=StorageBackend.MEMORY)
        container = Container(settings=test_settings)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        logger.debug(
            "container_created",
            storage_backend=self._settings.storage_backend.value,
            event_sink=self._settings.event_sink.value,
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @cached_property
    def database(self) -> "SQLiteDatabase":
        """SQLite database, created and initialized on first access."""
        from family_registry.repositories.sqlite import SQLiteDatabase

        db_path = str(self._settings.sqlite_path)
        logger.info("initializing_sqlite_database", path=db_path)
        db = SQLiteDatabase(db_path, check_same_thread=False)
        db.initialize()
        return db

    @cached_property
    def family_repository(self) -> "FamilyRepository":
        if self._settings.storage_backend == StorageBackend.MEMORY:
            from family_registry.repositories.memory import InMemoryFamilyRepository

            return InMemoryFamilyRepository()
        from family_registry.repositories.sqlite import SQLiteFamilyRepository

        return SQLiteFamilyRepository(self.database)

    @cached_property
    def service_repository(self) -> "BasicServiceRepository":
        if self._settings.storage_backend == StorageBackend.MEMORY:
            from family_registry.repositories.memory import (
                InMemoryBasicServiceRepository,
            )

            return InMemoryBasicServiceRepository()
        from family_registry.repositories.sqlite import SQLiteBasicServiceRepository

        return SQLiteBasicServiceRepository(self.database)

    @cached_property
    def event_sink(self) -> "EventSink":
        from family_registry.services.events import (
            HttpEventSink,
            InMemoryEventSink,
            LoggingEventSink,
        )

        sink_type = self._settings.event_sink
        if sink_type == EventSinkType.HTTP:
            url = self._settings.event_webhook_url
            if url is None:
                raise ConfigurationError(
                    "event_webhook_url must be set when event_sink is http",
                    context={"event_sink": sink_type.value},
                )
            return HttpEventSink(
                url,
                topic=self._settings.event_topic,
                timeout=self._settings.event_timeout_seconds,
            )
        if sink_type == EventSinkType.MEMORY:
            return InMemoryEventSink()
        return LoggingEventSink(topic=self._settings.event_topic)

    @cached_property
    def event_publisher(self) -> "FamilyEventPublisher":
        from family_registry.services.events import FamilyEventPublisher

        return FamilyEventPublisher(self.event_sink)

    @cached_property
    def family_manager(self) -> "FamilyAggregateManager":
        from family_registry.services.families import FamilyAggregateManager

        return FamilyAggregateManager(
            family_repo=self.family_repository,
            service_repo=self.service_repository,
            publisher=self.event_publisher,
        )

    async def aclose(self) -> None:
        """Flush pending events and release resources.

        Should be called during application shutdown.
        """
        if "event_publisher" in self.__dict__:
            logger.info("draining_family_events", pending=self.event_publisher.pending)
            await self.event_publisher.aclose()
        self.close()

    def close(self) -> None:
        if "database" in self.__dict__:
            logger.info("closing_database_connection")
            self.database.close()


_container: Container | None = None


def get_container() -> Container:
    """Get the global container singleton.

    For testing, create a Container directly with custom settings instead
    of using this function.
    """
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Drop the global container. Callers close it first when needed."""
    global _container
    _container = None


# FastAPI dependency functions
def get_family_manager() -> "FamilyAggregateManager":
    """FastAPI dependency for the family aggregate manager."""
    return get_container().family_manager
