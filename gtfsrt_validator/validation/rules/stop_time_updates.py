"""Rules for the ordering and completeness of TripUpdate.stop_time_update.

Each trip's stop_time_updates are scanned in wire order. Pairwise rules
compare neighbours only, and only when the field they inspect is set on
both neighbours; moving into or out of an absent field is not a violation.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterator

from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.models.feed import FeedEntity, TripUpdate
from gtfsrt_validator.validation.results import Occurrence, Severity
from gtfsrt_validator.validation.rules.base import ValidationRule
from gtfsrt_validator.validation.rules.scan import (
    adjacent_values,
    first_match,
    is_present,
    iter_trip_updates,
    sequence_of,
    stop_id_of,
    trip_label,
)


def stop_sequence_steps(
    trip_update: TripUpdate,
) -> Iterator[tuple[int, int, int, int]]:
    """Yield (index, prev, curr, sign) for adjacent stop_sequence pairs.

    sign is -1 when the sequence decreases, 0 when it repeats and 1 when it
    increases, so a decrease and a repeat can never be reported for the same
    pair.
    """
    for index, prev, curr in adjacent_values(trip_update.stop_time_updates, sequence_of):
        sign = (curr > prev) - (curr < prev)
        yield index, prev, curr, sign


class _StopSequenceRule(ValidationRule):
    """Shared scan for E002 and E036; subclasses pick the sign they report."""

    sign: int

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for _index, prev, curr, sign in stop_sequence_steps(trip_update):
                if sign == self.sign:
                    occurrences.append(
                        self._occurrence(entity.id, self._detail(entity, trip_update, prev, curr))
                    )
        return occurrences

    @abstractmethod
    def _detail(self, entity: FeedEntity, trip_update: TripUpdate, prev: int, curr: int) -> str:
        ...


class UnorderedStopSequenceRule(_StopSequenceRule):
    """E002 - stop_time_updates for a trip must be sorted by increasing stop_sequence."""

    code = "E002"
    severity = Severity.ERROR
    title = "stop_time_updates not strictly sorted by stop_sequence"
    sign = -1

    def _detail(self, entity: FeedEntity, trip_update: TripUpdate, prev: int, curr: int) -> str:
        return (
            f"{trip_label(entity, trip_update)} has stop_sequence {curr} "
            f"after stop_sequence {prev}"
        )


class RepeatingStopSequenceRule(_StopSequenceRule):
    """E036 - Sequential stop_time_updates have the same stop_sequence.

    Only stop_sequence is compared; the stop_ids of the pair may differ or be
    absent.
    """

    code = "E036"
    severity = Severity.ERROR
    title = "Sequential stop_time_updates have the same stop_sequence"
    sign = 0

    def _detail(self, entity: FeedEntity, trip_update: TripUpdate, prev: int, curr: int) -> str:
        return f"{trip_label(entity, trip_update)} repeats stop_sequence {curr}"


class RepeatingStopIdRule(ValidationRule):
    """E037 - Sequential stop_time_updates have the same stop_id.

    Only stop_id is compared; stop_sequence may differ or be absent.
    """

    code = "E037"
    severity = Severity.ERROR
    title = "Sequential stop_time_updates have the same stop_id"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            updates = trip_update.stop_time_updates
            for index, prev, curr in adjacent_values(updates, stop_id_of):
                if curr != prev:
                    continue
                seqs = f"{updates[index - 1].stop_sequence} -> {updates[index].stop_sequence}"
                occurrences.append(
                    self._occurrence(
                        entity.id,
                        f"{trip_label(entity, trip_update)} repeats stop_id {curr} "
                        f"(stop_sequence {seqs})",
                    )
                )
        return occurrences


class MissingStopScheduleRelationshipRule(ValidationRule):
    """W009 - schedule_relationship not populated for a stop_time_update.

    Reported at most once per trip, on the first update lacking the field.
    """

    code = "W009"
    severity = Severity.WARNING
    title = "stop_time_update.schedule_relationship not populated"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            match = first_match(
                trip_update.stop_time_updates,
                lambda u: u.schedule_relationship is None,
            )
            if match is None:
                continue
            _index, update = match
            missing = sum(
                1 for u in trip_update.stop_time_updates if u.schedule_relationship is None
            )
            occurrences.append(
                self._occurrence(
                    entity.id,
                    f"{trip_label(entity, trip_update)} has {missing} stop_time_update(s) "
                    f"without schedule_relationship, first at {update.label}",
                )
            )
        return occurrences


class MissingStopReferenceRule(ValidationRule):
    """E040 - stop_time_update doesn't contain stop_id or stop_sequence."""

    code = "E040"
    severity = Severity.ERROR
    title = "stop_time_update doesn't contain stop_id or stop_sequence"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for entity, trip_update in iter_trip_updates(context.current):
            for position, update in enumerate(trip_update.stop_time_updates):
                if update.stop_sequence is None and not is_present(update.stop_id):
                    occurrences.append(
                        self._occurrence(
                            entity.id,
                            f"{trip_label(entity, trip_update)} stop_time_update "
                            f"#{position} has neither stop_id nor stop_sequence",
                        )
                    )
        return occurrences


STOP_TIME_UPDATE_RULES: tuple[ValidationRule, ...] = (
    UnorderedStopSequenceRule(),
    RepeatingStopSequenceRule(),
    RepeatingStopIdRule(),
    MissingStopScheduleRelationshipRule(),
    MissingStopReferenceRule(),
)
