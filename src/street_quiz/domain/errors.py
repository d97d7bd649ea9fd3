# domain/errors.py


class QuizError(Exception):
    """Base class for every error raised by the quiz core."""


# Recoverable: surfaced to the player as a round-level error.
class NotFound(QuizError, LookupError):
    def __init__(self, street_name: str):
        super().__init__(f"No geometry found for street: {street_name}")
        self.street_name = street_name


class GeometryUnavailable(QuizError):
    def __init__(self, street_name: str, reason: str):
        super().__init__(f"Geometry unavailable for {street_name!r}: {reason}")
        self.street_name = street_name
        self.reason = reason


# Precondition violations: fail fast.
class InvalidGeometry(QuizError, ValueError):
    pass


class InsufficientPool(QuizError, ValueError):
    def __init__(self, pool_size: int, round_count: int):
        super().__init__(f"pool has {pool_size} names, {round_count} rounds requested")
        self.pool_size = pool_size
        self.round_count = round_count
