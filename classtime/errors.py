class SchedulingError(Exception):
    """Base class for every error raised by the scheduling engine."""


class InvalidConfiguration(SchedulingError, ValueError):
    pass


class InvalidTimeRange(SchedulingError, ValueError):
    pass


class AlreadyOccupied(SchedulingError, ValueError):
    def __init__(self, day: str, period: int):
        super().__init__(f"Cell {day} #{period} is already occupied")
        self.day = day
        self.period = period


class PlacementConflict(SchedulingError, ValueError):
    """Raised by manual placement when the next window cannot host the activity.

    ``window`` is the rejected window; its ``inserted_lunch`` stays committed.
    """

    def __init__(self, reason: str, window=None):
        super().__init__(reason)
        self.reason = reason
        self.window = window
