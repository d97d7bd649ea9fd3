# app/events.py
from dataclasses import dataclass


@dataclass(frozen=True)
class BaseEvent:
    round_index: int
    street_name: str


# Round lifecycle
@dataclass(frozen=True)
class RoundStarted(BaseEvent):
    token: int


@dataclass(frozen=True)
class GeometryResolved(BaseEvent):
    token: int
    lines: int


@dataclass(frozen=True)
class GeometryFailed(BaseEvent):
    token: int
    error: str


@dataclass(frozen=True)
class GuessSubmitted(BaseEvent):
    guess_lat: float
    guess_lon: float
    snapped_lat: float
    snapped_lon: float
    distance_m: float
    error_km: float


# Game lifecycle
@dataclass(frozen=True)
class GameCompleted:
    rounds: int
    total_km: float
