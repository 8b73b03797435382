"""Immutable data model for decoded GTFS-realtime feed messages.

Every optional protobuf field is modelled as ``X | None``. ``None`` means the
field was absent on the wire and is never coerced to the protobuf default
before a rule compares it. Sequences are tuples so that a decoded message
can be shared between concurrent validation runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# The only gtfs_realtime_version this validator accepts.
SUPPORTED_GTFS_REALTIME_VERSION = "1.0"


class Incrementality(Enum):
    """FeedHeader.incrementality.

    FULL_DATASET: The message is a complete snapshot of the feed.
    DIFFERENTIAL: The message only carries changes since the last one.
    """

    FULL_DATASET = "FULL_DATASET"
    DIFFERENTIAL = "DIFFERENTIAL"


class TripScheduleRelationship(Enum):
    """TripDescriptor.schedule_relationship."""

    SCHEDULED = "SCHEDULED"
    ADDED = "ADDED"
    UNSCHEDULED = "UNSCHEDULED"
    CANCELED = "CANCELED"
    REPLACEMENT = "REPLACEMENT"
    DUPLICATED = "DUPLICATED"
    DELETED = "DELETED"
    NEW = "NEW"


class StopScheduleRelationship(Enum):
    """TripUpdate.StopTimeUpdate.schedule_relationship."""

    SCHEDULED = "SCHEDULED"
    SKIPPED = "SKIPPED"
    NO_DATA = "NO_DATA"
    UNSCHEDULED = "UNSCHEDULED"


@dataclass(frozen=True)
class FeedHeader:
    """Feed-level metadata.

    Attributes:
        version: header.gtfs_realtime_version as sent.
        incrementality: FULL_DATASET when the field is absent (protobuf default).
        timestamp: POSIX seconds of feed creation, None when not populated.
    """

    version: str
    incrementality: Incrementality = Incrementality.FULL_DATASET
    timestamp: int | None = None


@dataclass(frozen=True)
class TripDescriptor:
    """Identifies the trip a TripUpdate refers to."""

    trip_id: str | None = None
    route_id: str | None = None
    schedule_relationship: TripScheduleRelationship | None = None


@dataclass(frozen=True)
class StopTimeEvent:
    """Arrival or departure prediction for one stop.

    Attributes:
        time: Absolute POSIX time of the event.
        delay: Delay in seconds relative to the schedule.
    """

    time: int | None = None
    delay: int | None = None


@dataclass(frozen=True)
class StopTimeUpdate:
    """Real-time update for one stop of a trip."""

    stop_sequence: int | None = None
    stop_id: str | None = None
    schedule_relationship: StopScheduleRelationship | None = None
    arrival: StopTimeEvent | None = None
    departure: StopTimeEvent | None = None

    @property
    def label(self) -> str:
        """Short human-readable locator used in occurrence details."""
        parts = []
        if self.stop_sequence is not None:
            parts.append(f"stop_sequence {self.stop_sequence}")
        if self.stop_id is not None:
            parts.append(f"stop_id {self.stop_id}")
        return ", ".join(parts) if parts else "unidentified stop"


@dataclass(frozen=True)
class TripUpdate:
    """Real-time progress of one trip.

    stop_time_updates keep wire order, which is the claimed visitation order.
    """

    trip: TripDescriptor = field(default_factory=TripDescriptor)
    stop_time_updates: tuple[StopTimeUpdate, ...] = ()


@dataclass(frozen=True)
class FeedEntity:
    """One update record in a feed message."""

    id: str
    trip_update: TripUpdate | None = None
    is_deleted: bool | None = None


@dataclass(frozen=True)
class FeedMessage:
    """A decoded GTFS-realtime message: header plus ordered entities."""

    header: FeedHeader
    entities: tuple[FeedEntity, ...] = ()

    def trip_updates(self) -> list[tuple[FeedEntity, TripUpdate]]:
        """Return (entity, trip_update) pairs in message order."""
        return [
            (entity, entity.trip_update)
            for entity in self.entities
            if entity.trip_update is not None
        ]
