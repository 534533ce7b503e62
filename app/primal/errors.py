"""Error types raised by the scheduling and progression engine."""


class PrimalError(Exception):
    """Base exception for engine errors."""

    pass


class ExerciseNotFoundError(PrimalError, LookupError):
    """Raised when an operation that must not silently no-op targets an unknown exercise.

    Attributes:
        exercise_id: The id that was looked up
    """

    def __init__(self, exercise_id: str) -> None:
        self.exercise_id = exercise_id
        super().__init__(f"Exercise not found: '{exercise_id}'")
