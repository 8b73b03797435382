"""Rules for the arrival and departure predictions of stop_time_updates."""

from __future__ import annotations

from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.models.feed import StopScheduleRelationship, StopTimeUpdate
from gtfsrt_validator.validation.results import Occurrence, Severity
from gtfsrt_validator.validation.rules.base import ValidationRule
from gtfsrt_validator.validation.rules.scan import adjacent_pairs, iter_trip_updates, trip_label

# Updates with these relationships are not expected to carry predictions
_NO_PREDICTION = frozenset({StopScheduleRelationship.SKIPPED, StopScheduleRelationship.NO_DATA})


def earliest_time(update: StopTimeUpdate) -> int | None:
    """Arrival time, falling back to departure time."""
    if update.arrival is not None and update.arrival.time is not None:
        return update.arrival.time
    if update.departure is not None:
        return update.departure.time
    return None


def latest_time(update: StopTimeUpdate) -> int | None:
    """Departure time, falling back to arrival time."""
    if update.departure is not None and update.departure.time is not None:
        return update.departure.time
    if update.arrival is not None:
        return update.arrival.time
    return None


class DecreasingStopTimesRule(ValidationRule):
    """E022 - Sequential stop_time_update times are not increasing.

    Compares the departure (or arrival) of one update with the arrival (or
    departure) of the next. Equal times are allowed.
    """

    code = "E022"
    severity = Severity.ERROR
    title = "Sequential stop_time_update times are not increasing"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for _index, prev, curr in adjacent_pairs(trip_update.stop_time_updates):
                prev_time = latest_time(prev)
                curr_time = earliest_time(curr)
                if prev_time is None or curr_time is None:
                    continue
                if curr_time < prev_time:
                    occurrences.append(
                        self._occurrence(
                            entity.id,
                            f"{trip_label(entity, trip_update)} time {curr_time} at "
                            f"{curr.label} is before time {prev_time} at {prev.label}",
                        )
                    )
        return occurrences


class DepartureBeforeArrivalRule(ValidationRule):
    """E025 - stop_time_update departure time is before arrival time."""

    code = "E025"
    severity = Severity.ERROR
    title = "stop_time_update departure time is before arrival time"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for update in trip_update.stop_time_updates:
                if update.arrival is None or update.departure is None:
                    continue
                arrival, departure = update.arrival.time, update.departure.time
                if arrival is None or departure is None:
                    continue
                if departure < arrival:
                    occurrences.append(
                        self._occurrence(
                            entity.id,
                            f"{trip_label(entity, trip_update)} departure {departure} is "
                            f"before arrival {arrival} at {update.label}",
                        )
                    )
        return occurrences


class PredictionForNoDataRule(ValidationRule):
    """E042 - arrival or departure provided for NO_DATA stop_time_update."""

    code = "E042"
    severity = Severity.ERROR
    title = "arrival or departure provided for NO_DATA stop_time_update"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for update in trip_update.stop_time_updates:
                if update.schedule_relationship is not StopScheduleRelationship.NO_DATA:
                    continue
                if update.arrival is None and update.departure is None:
                    continue
                occurrences.append(
                    self._occurrence(
                        entity.id,
                        f"{trip_label(entity, trip_update)} has NO_DATA {update.label} "
                        f"with arrival or departure",
                    )
                )
        return occurrences


class MissingPredictionRule(ValidationRule):
    """E043 - stop_time_update doesn't have arrival or departure.

    SKIPPED and NO_DATA updates are exempt. An update without a
    schedule_relationship is treated as SCHEDULED here.
    """

    code = "E043"
    severity = Severity.ERROR
    title = "stop_time_update doesn't have arrival or departure"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for update in trip_update.stop_time_updates:
                if update.schedule_relationship in _NO_PREDICTION:
                    continue
                if update.arrival is not None or update.departure is not None:
                    continue
                occurrences.append(
                    self._occurrence(
                        entity.id,
                        f"{trip_label(entity, trip_update)} {update.label} has neither "
                        f"arrival nor departure",
                    )
                )
        return occurrences


class EmptyStopTimeEventRule(ValidationRule):
    """E044 - stop_time_update arrival/departure doesn't have delay or time.

    One occurrence per offending event, so an update can contribute two.
    """

    code = "E044"
    severity = Severity.ERROR
    title = "stop_time_update arrival/departure doesn't have delay or time"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for update in trip_update.stop_time_updates:
                for name, event in (("arrival", update.arrival), ("departure", update.departure)):
                    if event is None or event.time is not None or event.delay is not None:
                        continue
                    occurrences.append(
                        self._occurrence(
                            entity.id,
                            f"{trip_label(entity, trip_update)} {name} at {update.label} "
                            f"has neither time nor delay",
                        )
                    )
        return occurrences


STOP_TIME_EVENT_RULES: tuple[ValidationRule, ...] = (
    DecreasingStopTimesRule(),
    DepartureBeforeArrivalRule(),
    PredictionForNoDataRule(),
    MissingPredictionRule(),
    EmptyStopTimeEventRule(),
)
