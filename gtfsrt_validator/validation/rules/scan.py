"""Scanning helpers shared by the trip-level rule families.

Pairwise checks only compare neighbours in wire order, and only when the
inspected field is present on both sides of the pair.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import TypeVar

from gtfsrt_validator.models.feed import FeedEntity, FeedMessage, StopTimeUpdate, TripUpdate

T = TypeVar("T")
V = TypeVar("V")


def is_present(value: object) -> bool:
    """True if an optional field carries a value (empty strings count as absent)."""
    return value is not None and value != ""


def adjacent_pairs(items: Sequence[T]) -> Iterator[tuple[int, T, T]]:
    """Yield (index_of_curr, prev, curr) for each adjacent pair."""
    for index in range(1, len(items)):
        yield index, items[index - 1], items[index]


def adjacent_values(
    items: Sequence[T], getter: Callable[[T], V | None]
) -> Iterator[tuple[int, V, V]]:
    """Yield (index_of_curr, prev_value, curr_value) where both values are present."""
    for index, prev, curr in adjacent_pairs(items):
        prev_value = getter(prev)
        curr_value = getter(curr)
        if is_present(prev_value) and is_present(curr_value):
            # is_present() excludes None
            yield index, prev_value, curr_value  # type: ignore[misc]


def first_match(items: Sequence[T], predicate: Callable[[T], bool]) -> tuple[int, T] | None:
    """Return (index, item) of the first item matching predicate, or None.

    Used by rules that report at most once per scope.
    """
    for index, item in enumerate(items):
        if predicate(item):
            return index, item
    return None


def iter_trip_updates(message: FeedMessage) -> Iterator[tuple[FeedEntity, TripUpdate]]:
    """Yield (entity, trip_update) for entities that carry a trip update."""
    yield from message.trip_updates()


def trip_label(entity: FeedEntity, trip_update: TripUpdate) -> str:
    """Locator for a trip in occurrence details."""
    if is_present(trip_update.trip.trip_id):
        return f"trip_id {trip_update.trip.trip_id}"
    return f"entity {entity.id}"


def sequence_of(update: StopTimeUpdate) -> int | None:
    return update.stop_sequence


def stop_id_of(update: StopTimeUpdate) -> str | None:
    return update.stop_id
