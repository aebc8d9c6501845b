"""Timeline error taxonomy.

Rejected operations are silent no-ops by default (logged at WARNING).
Animators created with ``strict=True`` raise these instead.
"""


class TimelineError(RuntimeError):
    """Base class for rejected timeline operations."""

    pass


class InvalidTimelineMutationError(TimelineError):
    """Structural change attempted while running, or with a bad name/offset."""

    pass


class InvalidDurationError(TimelineError, ValueError):
    """Negative or non-positive duration or padding."""

    pass


class CyclicContainmentError(TimelineError):
    """Child would make a container (transitively) contain itself, or is owned elsewhere."""

    pass
