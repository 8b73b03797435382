"""Data models for GTFS-realtime validation.

Models are frozen dataclasses so a validation context cannot change while
rules read it.
"""

from __future__ import annotations

from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.models.feed import (
    SUPPORTED_GTFS_REALTIME_VERSION,
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
from gtfsrt_validator.models.reference import ReferenceData, ReferenceMetadata, Route, Stop, Trip

__all__ = [
    # Feed
    "SUPPORTED_GTFS_REALTIME_VERSION",
    "FeedEntity",
    "FeedHeader",
    "FeedMessage",
    "Incrementality",
    "StopScheduleRelationship",
    "StopTimeEvent",
    "StopTimeUpdate",
    "TripDescriptor",
    "TripScheduleRelationship",
    "TripUpdate",
    # Reference
    "ReferenceData",
    "ReferenceMetadata",
    "Route",
    "Stop",
    "Trip",
    # Context
    "ValidationContext",
]
