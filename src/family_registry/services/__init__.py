from family_registry.services.events import (
    EventSink,
    FamilyEventPublisher,
    HttpEventSink,
    InMemoryEventSink,
    LoggingEventSink,
)
from family_registry.services.families import FamilyAggregateManager

__all__ = [
    "EventSink",
    "FamilyAggregateManager",
    "FamilyEventPublisher",
    "HttpEventSink",
    "InMemoryEventSink",
    "LoggingEventSink",
]
