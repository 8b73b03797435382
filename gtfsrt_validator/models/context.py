"""ValidationContext: everything one validation run may read."""

from __future__ import annotations

from dataclasses import dataclass

from gtfsrt_validator.models.feed import FeedMessage
from gtfsrt_validator.models.reference import ReferenceData, ReferenceMetadata


@dataclass(frozen=True)
class ValidationContext:
    """Immutable input of one validation run.

    A context is built fresh for each poll cycle and discarded afterwards.
    The previous message is owned by the caller that polls the feed; the
    engine keeps no history of its own.

    Attributes:
        timestamp: Validation time in POSIX seconds.
        current: The message being validated.
        previous: The last successfully decoded message for the same feed.
        reference: Static schedule data, if loaded.
        reference_metadata: Lookup indices derived from ``reference``.
    """

    timestamp: int
    current: FeedMessage
    previous: FeedMessage | None = None
    reference: ReferenceData | None = None
    reference_metadata: ReferenceMetadata | None = None

    @classmethod
    def build(
        cls,
        current: FeedMessage,
        *,
        timestamp: int,
        previous: FeedMessage | None = None,
        reference: ReferenceData | None = None,
        reference_metadata: ReferenceMetadata | None = None,
    ) -> ValidationContext:
        """Create a context, deriving lookup indices when only data is given."""
        if reference is not None and reference_metadata is None:
            reference_metadata = ReferenceMetadata.from_reference(reference)
        return cls(
            timestamp=timestamp,
            current=current,
            previous=previous,
            reference=reference,
            reference_metadata=reference_metadata,
        )

    @property
    def has_reference(self) -> bool:
        """True if reference lookups are available to rules."""
        return self.reference_metadata is not None
