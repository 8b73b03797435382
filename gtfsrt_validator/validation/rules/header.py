"""Rules for the FeedHeader."""

from __future__ import annotations

from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.models.feed import SUPPORTED_GTFS_REALTIME_VERSION, Incrementality
from gtfsrt_validator.validation.results import Occurrence, Severity
from gtfsrt_validator.validation.rules.base import ValidationRule


class InvalidVersionRule(ValidationRule):
    """E038 - header.gtfs_realtime_version must be exactly "1.0".

    Plausible-looking versions such as "2.0" or "1" are violations too; the
    comparison is on the string value, not on a parsed number.
    """

    code = "E038"
    severity = Severity.ERROR
    title = "Invalid header.gtfs_realtime_version"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        version = context.current.header.version
        if version == SUPPORTED_GTFS_REALTIME_VERSION:
            return []
        return [
            self._occurrence(
                None,
                f"header.gtfs_realtime_version is '{version}', "
                f"expected '{SUPPORTED_GTFS_REALTIME_VERSION}'",
            )
        ]


class DeletedEntityInFullDatasetRule(ValidationRule):
    """E039 - FULL_DATASET feeds should not include entity.is_deleted.

    Gated on incrementality only: DIFFERENTIAL feeds may delete entities.
    """

    code = "E039"
    severity = Severity.ERROR
    title = "FULL_DATASET feeds should not include entity.is_deleted"

    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        message = context.current
        if message.header.incrementality is not Incrementality.FULL_DATASET:
            return []
        return [
            self._occurrence(entity.id, f"entity {entity.id} has is_deleted=true")
            for entity in message.entities
            if entity.is_deleted is True
        ]


HEADER_RULES: tuple[ValidationRule, ...] = (
    InvalidVersionRule(),
    DeletedEntityInFullDatasetRule(),
)
