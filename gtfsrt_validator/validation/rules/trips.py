"""Rules for trip updates as a whole, including lookups in the static schedule.

E003 and E011 need reference data; they raise MissingReferenceDataError when
the context has none, and the runner reports them as failed.
"""

from __future__ import annotations

from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.models.feed import TripScheduleRelationship
from gtfsrt_validator.validation.results import Occurrence, Severity
from gtfsrt_validator.validation.rules.base import ValidationRule
from gtfsrt_validator.validation.rules.scan import is_present, iter_trip_updates, trip_label


class MissingStopTimeUpdatesRule(ValidationRule):
    """E041 - trip doesn't have any stop_time_updates, unless it is CANCELED."""

    code = "E041"
    severity = Severity.ERROR
    title = "trip doesn't have any stop_time_updates"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        return [
            self._occurrence(
                entity.id, f"{trip_label(entity, trip_update)} has no stop_time_updates"
            )
            for entity, trip_update in iter_trip_updates(context.current)
            if not trip_update.stop_time_updates
            and trip_update.trip.schedule_relationship is not TripScheduleRelationship.CANCELED
        ]


class UnknownTripIdRule(ValidationRule):
    """E003 - trip_id is not in the GTFS data, unless the trip is ADDED."""

    code = "E003"
    severity = Severity.ERROR
    title = "trip_id not in GTFS data"
    requires_reference = True

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        reference = self._reference(context)
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            trip = trip_update.trip
            if not is_present(trip.trip_id):
                continue
            if trip.schedule_relationship is TripScheduleRelationship.ADDED:
                continue
            if trip.trip_id not in reference.trip_ids:
                occurrences.append(
                    self._occurrence(entity.id, f"trip_id {trip.trip_id} is not in GTFS trips.txt")
                )
        return occurrences


class UnknownStopIdRule(ValidationRule):
    """E011 - stop_id in a stop_time_update is not in the GTFS data."""

    code = "E011"
    severity = Severity.ERROR
    title = "stop_id not in GTFS data"
    requires_reference = True

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        reference = self._reference(context)
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for update in trip_update.stop_time_updates:
                if is_present(update.stop_id) and update.stop_id not in reference.stop_ids:
                    occurrences.append(
                        self._occurrence(
                            entity.id,
                            f"{trip_label(entity, trip_update)} references stop_id "
                            f"{update.stop_id} which is not in GTFS stops.txt",
                        )
                    )
        return occurrences


TRIP_RULES: tuple[ValidationRule, ...] = (
    UnknownTripIdRule(),
    UnknownStopIdRule(),
    MissingStopTimeUpdatesRule(),
)
