"""Static schedule reference data consumed by the validation engine.

The engine never builds these structures from GTFS files; an external loader
supplies them already populated. They are read-only and may be shared by
many concurrent validation runs for the same agency.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Stop:
    """GTFS stop."""

    stop_id: str
    name: str = ""


@dataclass(frozen=True)
class Route:
    """GTFS route."""

    route_id: str
    route_short_name: str = ""


@dataclass(frozen=True)
class Trip:
    """GTFS trip."""

    trip_id: str
    route_id: str = ""
    service_id: str = ""


def _freeze(mapping: Mapping[str, object]) -> Mapping[str, object]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ReferenceData:
    """Static schedule entities keyed by their GTFS identifiers."""

    stops: Mapping[str, Stop] = field(default_factory=dict)
    trips: Mapping[str, Trip] = field(default_factory=dict)
    routes: Mapping[str, Route] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen dataclass: bypass __setattr__ to swap in read-only views
        object.__setattr__(self, "stops", _freeze(self.stops))
        object.__setattr__(self, "trips", _freeze(self.trips))
        object.__setattr__(self, "routes", _freeze(self.routes))

    @classmethod
    def from_records(
        cls,
        *,
        stops: list[Stop] | None = None,
        trips: list[Trip] | None = None,
        routes: list[Route] | None = None,
    ) -> ReferenceData:
        """Build reference data from lists of records."""
        return cls(
            stops={s.stop_id: s for s in stops or []},
            trips={t.trip_id: t for t in trips or []},
            routes={r.route_id: r for r in routes or []},
        )


@dataclass(frozen=True)
class ReferenceMetadata:
    """Precomputed lookup indices over ReferenceData.

    Attributes:
        stop_ids: Every stop_id present in the schedule.
        trip_ids: Every trip_id present in the schedule.
        route_ids: Every route_id present in the schedule.
    """

    stop_ids: frozenset[str] = frozenset()
    trip_ids: frozenset[str] = frozenset()
    route_ids: frozenset[str] = frozenset()

    @classmethod
    def from_reference(cls, data: ReferenceData) -> ReferenceMetadata:
        """Precompute id sets for the given reference data."""
        return cls(
            stop_ids=frozenset(data.stops),
            trip_ids=frozenset(data.trips),
            route_ids=frozenset(data.routes),
        )
