# app/hooks.py
from typing import Protocol

from street_quiz.app.events import (
    GameCompleted,
    GeometryFailed,
    GeometryResolved,
    GuessSubmitted,
    RoundStarted,
)


class GameHooks(Protocol):
    def round_start(self, ev: RoundStarted): ...
    def resolved(self, ev: GeometryResolved): ...
    def failed(self, ev: GeometryFailed): ...
    def stale(self, *, street_name, token, current_token): ...
    def guess(self, *, round_index, lat, lon, replaced): ...
    def submitted(self, ev: GuessSubmitted): ...
    def completed(self, ev: GameCompleted): ...
    def restarted(self, *, names): ...


class NoopHooks:
    def round_start(self, *_, **__):
        pass

    def resolved(self, *_, **__):
        pass

    def failed(self, *_, **__):
        pass

    def stale(self, *_, **__):
        pass

    def guess(self, *_, **__):
        pass

    def submitted(self, *_, **__):
        pass

    def completed(self, *_, **__):
        pass

    def restarted(self, *_, **__):
        pass
