# street_quiz/domain/state.py
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from street_quiz.domain.errors import InsufficientPool
from street_quiz.runtime.rng import sample_without_replacement


@dataclass(frozen=True)
class RoundResult:
    street_name: str
    error_km: float  # one decimal place


@dataclass
class GameSession:
    """
    Owns one game: the sampled names, the round cursor and the recorded results.

    `round_token` changes whenever the current round changes (advance, restart,
    completion) and never repeats, so async work started for an earlier round
    can tell it is stale.
    """

    rng: np.random.Generator
    names: list[str] = field(default_factory=list)
    round_index: int = 0
    round_token: int = 0
    complete: bool = False
    _pool: list[str] = field(default_factory=list, repr=False)
    _results: list[RoundResult] = field(default_factory=list, repr=False)
    _total_tenths: int = 0

    def start(self, pool: Sequence[str], round_count: int) -> None:
        if round_count < 1:
            raise ValueError(f"round_count must be >= 1, got {round_count}")
        unique = list(dict.fromkeys(pool))
        if len(unique) < round_count:
            raise InsufficientPool(len(unique), round_count)
        self._pool = unique
        self.names = sample_without_replacement(unique, round_count, self.rng)
        self.round_index = 0
        self.complete = False
        self._results = []
        self._total_tenths = 0
        self.round_token += 1

    def restart(self) -> None:
        if not self.names:
            raise RuntimeError("restart() before start()")
        self.start(self._pool, len(self.names))

    # ---------------- round progression -------------------

    @property
    def started(self) -> bool:
        return bool(self.names)

    @property
    def round_count(self) -> int:
        return len(self.names)

    @property
    def current_name(self) -> str | None:
        if not self.names or self.complete:
            return None
        return self.names[self.round_index]

    def record(self, result: RoundResult) -> None:
        if self.complete or not self.names:
            raise RuntimeError("no round in progress")
        if len(self._results) > self.round_index:
            raise RuntimeError(f"round {self.round_index} already recorded")
        self._results.append(result)
        self._total_tenths += math.floor(result.error_km * 10 + 0.5)

    def advance(self) -> bool:
        """Move to the next round; returns True once the game is complete."""
        if self.complete:
            return True
        if self.round_index < len(self.names) - 1:
            self.round_index += 1
        else:
            self.complete = True
        self.round_token += 1
        return self.complete

    # ---------------- scores -------------------

    @property
    def results(self) -> tuple[RoundResult, ...]:
        return tuple(self._results)

    @property
    def total_km(self) -> float:
        return self._total_tenths / 10
