"""Decode GTFS-realtime protobuf messages into the validator's data model.

Optional protobuf fields are read through ``HasField`` so that a field that
was never sent becomes ``None`` rather than its protobuf default. The one
exception is header.incrementality, whose absence means FULL_DATASET by
definition of the protocol.

Usage:
    from gtfsrt_validator.decode import load_feed

    message = load_feed(Path("vehicle_updates.pb"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from google.protobuf.message import DecodeError
from google.transit import gtfs_realtime_pb2

from gtfsrt_validator.errors import FeedDecodeError, FeedNotFoundError
from gtfsrt_validator.models.feed import (
    FeedEntity,
    FeedHeader,
    FeedMessage,
    Incrementality,
    StopScheduleRelationship,
    StopTimeEvent,
    StopTimeUpdate,
    TripDescriptor,
    TripScheduleRelationship,
    TripUpdate,
)

logger = logging.getLogger(__name__)

_pb = gtfs_realtime_pb2


def _optional(message: Any, name: str) -> Any | None:
    """Return a scalar field's value, or None if it was not set."""
    return getattr(message, name) if message.HasField(name) else None


def _header(header: Any) -> FeedHeader:
    incrementality = Incrementality.FULL_DATASET
    if header.HasField("incrementality"):
        incrementality = Incrementality(_pb.FeedHeader.Incrementality.Name(header.incrementality))
    return FeedHeader(
        version=header.gtfs_realtime_version,
        incrementality=incrementality,
        timestamp=_optional(header, "timestamp"),
    )


def _trip(trip: Any) -> TripDescriptor:
    relationship = None
    if trip.HasField("schedule_relationship"):
        relationship = TripScheduleRelationship(
            _pb.TripDescriptor.ScheduleRelationship.Name(trip.schedule_relationship)
        )
    return TripDescriptor(
        trip_id=_optional(trip, "trip_id"),
        route_id=_optional(trip, "route_id"),
        schedule_relationship=relationship,
    )


def _event(update: Any, name: str) -> StopTimeEvent | None:
    if not update.HasField(name):
        return None
    event = getattr(update, name)
    return StopTimeEvent(time=_optional(event, "time"), delay=_optional(event, "delay"))


def _stop_time_update(update: Any) -> StopTimeUpdate:
    relationship = None
    if update.HasField("schedule_relationship"):
        relationship = StopScheduleRelationship(
            _pb.TripUpdate.StopTimeUpdate.ScheduleRelationship.Name(update.schedule_relationship)
        )
    return StopTimeUpdate(
        stop_sequence=_optional(update, "stop_sequence"),
        stop_id=_optional(update, "stop_id"),
        schedule_relationship=relationship,
        arrival=_event(update, "arrival"),
        departure=_event(update, "departure"),
    )


def _entity(entity: Any) -> FeedEntity:
    trip_update = None
    if entity.HasField("trip_update"):
        trip_update = TripUpdate(
            trip=_trip(entity.trip_update.trip),
            stop_time_updates=tuple(
                _stop_time_update(u) for u in entity.trip_update.stop_time_update
            ),
        )
    return FeedEntity(
        id=entity.id,
        trip_update=trip_update,
        is_deleted=_optional(entity, "is_deleted"),
    )


def from_protobuf(message: gtfs_realtime_pb2.FeedMessage) -> FeedMessage:
    """Convert a parsed protobuf FeedMessage to an immutable FeedMessage.

    Raises:
        ValueError: If an enum field holds a value this validator does not know.
    """
    return FeedMessage(
        header=_header(message.header),
        entities=tuple(_entity(e) for e in message.entity),
    )


def parse_feed(data: bytes, *, source: str = "<bytes>") -> FeedMessage:
    """Parse serialized GTFS-realtime bytes.

    Args:
        data: Protobuf-encoded FeedMessage.
        source: Name used in error messages (file path or URL).

    Raises:
        FeedDecodeError: If the bytes are not a valid FeedMessage.
    """
    message = gtfs_realtime_pb2.FeedMessage()
    try:
        message.ParseFromString(data)
        feed = from_protobuf(message)
    except (DecodeError, ValueError) as err:
        # ValueError: enum value unknown to this validator
        raise FeedDecodeError(source, err) from err

    logger.debug("Decoded %d entities from %s", len(feed.entities), source)
    return feed


def load_feed(path: Path) -> FeedMessage:
    """Read and decode a GTFS-realtime feed file.

    Raises:
        FeedNotFoundError: If the file does not exist.
        FeedDecodeError: If the file is not a valid FeedMessage.
    """
    if not path.is_file():
        raise FeedNotFoundError(str(path))
    return parse_feed(path.read_bytes(), source=str(path))
