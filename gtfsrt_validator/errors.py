"""Structured error codes for the GTFS-realtime validator.

Violations found in a feed are never raised; they are reported as
occurrences. Exceptions are reserved for broken contracts with the engine
itself and follow the format GTFSRT-{category}{number}:
- GTFSRT-RUL*: Rule registry and selection errors
- GTFSRT-CTX*: Validation context errors
- GTFSRT-FED*: Feed decoding errors
- GTFSRT-CFG*: Configuration errors
"""

from __future__ import annotations

from typing import Any


class GtfsRtValidatorError(Exception):
    """Base class for all validator errors.

    Attributes:
        code: GTFSRT-{category}{number} identifier, fixed per class.
        message: Description without the code prefix.
        context: Keyword details. Each is also set as an attribute unless it
            would shadow code, message, context or args.
    """

    code: str = "GTFSRT-000"

    _PROTECTED = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(f"[{self.code}] {message}")
        self.message = message
        self.context = dict(context)
        for name in context.keys() - self._PROTECTED:
            setattr(self, name, context[name])

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form used by --json output."""
        return {"code": self.code, "message": self.message, "context": self.context}


# Rule Errors (GTFSRT-RUL*)
class RuleError(GtfsRtValidatorError):
    """Base class for rule registry errors."""

    code = "GTFSRT-RUL000"


class UnknownRuleError(RuleError):
    """A rule code is not registered.

    Error code: GTFSRT-RUL001
    """

    code = "GTFSRT-RUL001"

    def __init__(self, rule_code: str) -> None:
        super().__init__(f"Unknown rule code '{rule_code}'", rule_code=rule_code)


class DuplicateRuleError(RuleError):
    """Two rules were registered under the same code.

    Error code: GTFSRT-RUL002
    """

    code = "GTFSRT-RUL002"

    def __init__(self, rule_code: str) -> None:
        super().__init__(f"Rule code '{rule_code}' is already registered", rule_code=rule_code)


# Context Errors (GTFSRT-CTX*)
class ContextError(GtfsRtValidatorError):
    """Base class for validation context errors."""

    code = "GTFSRT-CTX000"


class MissingReferenceDataError(ContextError):
    """A rule needs static schedule data the context lacks.

    Error code: GTFSRT-CTX001
    """

    code = "GTFSRT-CTX001"

    def __init__(self, rule_code: str) -> None:
        super().__init__(
            f"Rule {rule_code} requires reference schedule data",
            rule_code=rule_code,
        )


# Feed Errors (GTFSRT-FED*)
class FeedError(GtfsRtValidatorError):
    """Base class for feed decoding errors."""

    code = "GTFSRT-FED000"


class FeedDecodeError(FeedError):
    """Bytes could not be parsed as a GTFS-realtime FeedMessage.

    The protobuf exception is available as ``cause`` but is left out of
    ``context`` so that to_dict() stays serializable.

    Error code: GTFSRT-FED001
    """

    code = "GTFSRT-FED001"

    def __init__(self, source: str, cause: Exception) -> None:
        super().__init__(
            f"Cannot decode GTFS-realtime feed from {source}: {cause}",
            source=source,
            cause_type=type(cause).__name__,
            cause_message=str(cause),
        )
        self.cause = cause


class FeedNotFoundError(FeedError):
    """A feed file does not exist.

    Error code: GTFSRT-FED002
    """

    code = "GTFSRT-FED002"

    def __init__(self, path: str) -> None:
        super().__init__(f"Feed file not found: {path}", path=path)


# Configuration Errors (GTFSRT-CFG*)
class ConfigError(GtfsRtValidatorError):
    """Base class for .gtfsrt/config.yaml errors."""

    code = "GTFSRT-CFG000"


class ConfigParseError(ConfigError):
    """The config file is not valid YAML.

    Error code: GTFSRT-CFG001
    """

    code = "GTFSRT-CFG001"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path} as YAML: {reason}", path=path, reason=reason)


class ConfigInvalidStructureError(ConfigError):
    """The config file is YAML but not a mapping of settings.

    Error code: GTFSRT-CFG002
    """

    code = "GTFSRT-CFG002"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"{path} must hold a mapping of settings: {reason}", path=path, reason=reason
        )


class ConfigInvalidValueError(ConfigError):
    """A setting holds a value of the wrong type or format.

    Error code: GTFSRT-CFG003
    """

    code = "GTFSRT-CFG003"

    def __init__(self, key: str, value: object, reason: str) -> None:
        super().__init__(
            f"Invalid value for {key}: {reason}, got {value!r}",
            key=key,
            value=str(value),
            reason=reason,
        )
