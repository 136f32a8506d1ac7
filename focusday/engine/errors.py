class SchedulingError(ValueError):
    """Base class for precondition violations reported by the planner."""


class InvalidTimeFormat(SchedulingError):
    """A wall-clock string is not a valid 24-hour "HH:MM" value."""


class InvalidWindow(SchedulingError):
    """The day window does not end strictly after it starts."""


class DuplicateTaskId(SchedulingError):
    """Two tasks handed to the planner share an id, so their blocks would too."""
