"""Shared pytest fixtures for gtfsrt-validator tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from unittest import mock

import pytest
from builders import MIN_POSIX_TIME
from google.transit import gtfs_realtime_pb2

from gtfsrt_validator.models import ReferenceData, Stop, Trip


@pytest.fixture(autouse=True)
def clean_env() -> Iterator[None]:
    """Hide any GTFSRT_* variables set in the developer's shell."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("GTFSRT_")}
    with mock.patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def reference_data() -> ReferenceData:
    """Small static schedule: stops 1000-3000 and trips 1234/5678."""
    return ReferenceData.from_records(
        stops=[Stop("1000", "First"), Stop("2000", "Second"), Stop("3000", "Third")],
        trips=[Trip("1234", route_id="r1"), Trip("5678", route_id="r1")],
    )


@pytest.fixture
def pb_feed() -> gtfs_realtime_pb2.FeedMessage:
    """Protobuf FeedMessage with required header fields and one trip update.

    Trip 1234 visits stop 1000 (seq 1) then 2000 (seq 5).
    """
    message = gtfs_realtime_pb2.FeedMessage()
    message.header.gtfs_realtime_version = "1.0"
    message.header.incrementality = gtfs_realtime_pb2.FeedHeader.FULL_DATASET
    message.header.timestamp = MIN_POSIX_TIME

    entity = message.entity.add()
    entity.id = "1"
    entity.trip_update.trip.trip_id = "1234"
    entity.trip_update.trip.schedule_relationship = gtfs_realtime_pb2.TripDescriptor.SCHEDULED

    for sequence, stop_id, offset in ((1, "1000", 60), (5, "2000", 300)):
        update = entity.trip_update.stop_time_update.add()
        update.stop_sequence = sequence
        update.stop_id = stop_id
        update.schedule_relationship = gtfs_realtime_pb2.TripUpdate.StopTimeUpdate.SCHEDULED
        update.arrival.time = MIN_POSIX_TIME + offset
        update.departure.time = MIN_POSIX_TIME + offset + 30
    return message


@pytest.fixture
def write_feed(tmp_path: Path) -> Callable[..., Path]:
    """Return a function that serializes a protobuf FeedMessage to a .pb file."""

    def _write(message: gtfs_realtime_pb2.FeedMessage, name: str = "feed.pb") -> Path:
        path = tmp_path / name
        path.write_bytes(message.SerializeToString())
        return path

    return _write
