"""
Engine error taxonomy.

All errors are deterministic input/validation failures. They are raised
to the caller and never retried.
"""


class TrailEngineError(Exception):
    """Base engine error."""
    pass


class InvalidDateError(TrailEngineError, ValueError):
    """Date is not a well-formed calendar date (or is not allowed here)."""
    pass


class InvalidMeasurementError(TrailEngineError, ValueError):
    """Negative, non-finite or otherwise invalid steps/distance value."""
    pass


class InvalidStrideError(TrailEngineError, ValueError):
    """Stride length is not strictly positive."""
    pass


class NonMonotonicDistanceError(TrailEngineError):
    """Update would decrease a run's cumulative distance."""

    def __init__(self, previous_m: float, new_m: float):
        self.previous_m = previous_m
        self.new_m = new_m
        super().__init__(
            f"Cumulative distance cannot decrease ({previous_m:.1f} m -> {new_m:.1f} m)"
        )


class UnknownTrailError(TrailEngineError, LookupError):
    """Trail id is not present in the catalog."""

    def __init__(self, trail_id: str):
        self.trail_id = trail_id
        super().__init__(f"Unknown trail: {trail_id}")


class NotEntitledError(TrailEngineError):
    """Current user's tier does not give access to the trail."""

    def __init__(self, trail_id: str):
        self.trail_id = trail_id
        super().__init__(f"Trail {trail_id} requires a premium subscription")


class RunNotFoundError(TrailEngineError, LookupError):
    """User has no run on the trail."""

    def __init__(self, user_id: str, trail_id: str):
        self.user_id = user_id
        self.trail_id = trail_id
        super().__init__(f"No run on trail {trail_id} for user {user_id}")


class RunAlreadyCompletedError(TrailEngineError):
    """Run is finished and can no longer be changed."""

    def __init__(self, user_id: str, trail_id: str):
        self.user_id = user_id
        self.trail_id = trail_id
        super().__init__(f"Run on trail {trail_id} for user {user_id} is already completed")
