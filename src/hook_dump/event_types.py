"""Events flowing from the HTTP endpoint to the viewer.

// [LAW:one-source-of-truth] The class IS the type; kind is a fixed class attribute.
"""

from dataclasses import dataclass, field
from enum import Enum


class EventKind(Enum):
    """Discriminator for hook-dump events."""

    PAYLOAD_RECEIVED = "payload_received"
    PAYLOAD_REJECTED = "payload_rejected"
    STORAGE_UPDATED = "storage_updated"


@dataclass(frozen=True)
class HookEvent:
    """Base class for all events."""

    recv_ns: int = 0


@dataclass(frozen=True)
class PayloadReceivedEvent(HookEvent):
    """A JSON payload was accepted and stored."""

    payload_id: str = ""
    value: object = None
    path: str = "/"
    kind: EventKind = field(default=EventKind.PAYLOAD_RECEIVED, init=False)


@dataclass(frozen=True)
class PayloadRejectedEvent(HookEvent):
    """A request body could not be parsed as JSON."""

    reason: str = ""
    path: str = "/"
    kind: EventKind = field(default=EventKind.PAYLOAD_REJECTED, init=False)


@dataclass(frozen=True)
class StorageUpdatedEvent(HookEvent):
    """The store changed outside of ingestion (delete / clear)."""

    removed: int = 0
    kind: EventKind = field(default=EventKind.STORAGE_UPDATED, init=False)
