"""Built-in validation rules, grouped by the part of the feed they inspect.

BUILTIN_RULES is ordered by rule code and holds one instance per code.
"""

from __future__ import annotations

from gtfsrt_validator.validation.rules.base import RuleMetadata, ValidationRule
from gtfsrt_validator.validation.rules.header import HEADER_RULES
from gtfsrt_validator.validation.rules.stop_time_events import STOP_TIME_EVENT_RULES
from gtfsrt_validator.validation.rules.stop_time_updates import STOP_TIME_UPDATE_RULES
from gtfsrt_validator.validation.rules.trips import TRIP_RULES

BUILTIN_RULES: tuple[ValidationRule, ...] = tuple(
    sorted(
        HEADER_RULES + STOP_TIME_UPDATE_RULES + STOP_TIME_EVENT_RULES + TRIP_RULES,
        key=lambda rule: rule.code,
    )
)

__all__ = [
    "BUILTIN_RULES",
    "HEADER_RULES",
    "STOP_TIME_EVENT_RULES",
    "STOP_TIME_UPDATE_RULES",
    "TRIP_RULES",
    "RuleMetadata",
    "ValidationRule",
]
