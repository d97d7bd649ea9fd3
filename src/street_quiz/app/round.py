# street_quiz/app/round.py
"""
Round state machine.

    LOADING --resolved--> AWAITING_GUESS --guess--> GUESS_PLACED --submit--> SUBMITTED
       |  ^                                          |  ^ guess (replace)        |
    failed retry                                     +--+                        |
       v  |                                                     advance: LOADING (next round)
     ERROR                                                      finish:  COMPLETE (last round)

Actions with no entry in TRANSITIONS are no-ops. A geometry resolution only
lands if the session's round token is unchanged when it completes.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from street_quiz.app.events import (
    GameCompleted,
    GeometryFailed,
    GeometryResolved,
    GuessSubmitted,
    RoundStarted,
)
from street_quiz.app.hooks import GameHooks, NoopHooks
from street_quiz.app.protocols import GeometryResolver
from street_quiz.domain.entities.geography import Geometry, GuessPoint, Projection
from street_quiz.domain.errors import GeometryUnavailable, NotFound
from street_quiz.domain.projection import project, to_error_km
from street_quiz.domain.state import GameSession, RoundResult


class Phase(Enum):
    LOADING = "loading"
    AWAITING_GUESS = "awaiting_guess"
    GUESS_PLACED = "guess_placed"
    SUBMITTED = "submitted"
    ERROR = "error"
    COMPLETE = "complete"


class Action(Enum):
    RESOLVED = "resolved"
    FAILED = "failed"
    RETRY = "retry"
    GUESS = "guess"
    SUBMIT = "submit"
    ADVANCE = "advance"
    FINISH = "finish"


TRANSITIONS: dict[tuple[Phase, Action], Phase] = {
    (Phase.LOADING, Action.RESOLVED): Phase.AWAITING_GUESS,
    (Phase.LOADING, Action.FAILED): Phase.ERROR,
    (Phase.ERROR, Action.RETRY): Phase.LOADING,
    (Phase.AWAITING_GUESS, Action.GUESS): Phase.GUESS_PLACED,
    (Phase.GUESS_PLACED, Action.GUESS): Phase.GUESS_PLACED,
    (Phase.GUESS_PLACED, Action.SUBMIT): Phase.SUBMITTED,
    (Phase.SUBMITTED, Action.ADVANCE): Phase.LOADING,
    (Phase.SUBMITTED, Action.FINISH): Phase.COMPLETE,
}


def next_phase(phase: Phase, action: Action) -> Phase | None:
    return TRANSITIONS.get((phase, action))


@dataclass
class RoundState:
    token: int
    index: int
    street_name: str
    phase: Phase = Phase.LOADING
    geometry: Geometry | None = None
    guess: GuessPoint | None = None
    projection: Projection | None = None
    result: RoundResult | None = None
    error: str | None = None
    in_flight: bool = False


@dataclass(frozen=True)
class RoundView:
    """What a presentation layer needs to draw one frame."""

    round_index: int
    round_count: int
    street_name: str | None
    phase: Phase
    geometry: Geometry | None
    guess: GuessPoint | None
    projection: Projection | None
    error: str | None
    results: tuple[RoundResult, ...]
    total_km: float

    @property
    def loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def has_error(self) -> bool:
        return self.phase is Phase.ERROR

    @property
    def complete(self) -> bool:
        return self.phase is Phase.COMPLETE

    @property
    def can_submit(self) -> bool:
        return self.phase is Phase.GUESS_PLACED


class RoundEngine:
    def __init__(
        self,
        session: GameSession,
        store: GeometryResolver,
        *,
        hooks: GameHooks | None = None,
    ):
        self.session = session
        self.store = store
        self._hooks = hooks or NoopHooks()
        self._round: RoundState | None = None

    @property
    def phase(self) -> Phase | None:
        return self._round.phase if self._round else None

    @property
    def current(self) -> RoundState | None:
        return self._round

    def _open_round(self) -> None:
        s = self.session
        self._round = RoundState(token=s.round_token, index=s.round_index, street_name=s.current_name)
        self._hooks.round_start(
            RoundStarted(round_index=s.round_index, street_name=s.current_name, token=s.round_token)
        )

    # ------------ game control --------------

    def start(self, pool: Sequence[str], round_count: int) -> Phase:
        self.session.start(pool, round_count)
        self._open_round()
        return self._round.phase

    def restart(self) -> Phase:
        self.session.restart()
        self._hooks.restarted(names=self.session.names)
        self._open_round()
        return self._round.phase

    async def load(self) -> Phase | None:
        """Resolve the current round's geometry. One resolution per round at a time."""
        r = self._round
        if r is None or r.phase is not Phase.LOADING or r.in_flight:
            return self.phase

        r.in_flight = True
        try:
            geometry = await self.store.resolve(r.street_name)
        except (NotFound, GeometryUnavailable) as exc:
            action, geometry, error = Action.FAILED, None, str(exc)
        else:
            action, error = Action.RESOLVED, None
        finally:
            r.in_flight = False

        if r.token != self.session.round_token or r is not self._round:
            self._hooks.stale(
                street_name=r.street_name, token=r.token, current_token=self.session.round_token
            )
            return self.phase

        r.phase = next_phase(r.phase, action)
        r.geometry, r.error = geometry, error
        if action is Action.RESOLVED:
            self._hooks.resolved(
                GeometryResolved(
                    round_index=r.index,
                    street_name=r.street_name,
                    token=r.token,
                    lines=len(geometry.lines),
                )
            )
        else:
            self._hooks.failed(
                GeometryFailed(round_index=r.index, street_name=r.street_name, token=r.token, error=error)
            )
        return r.phase

    async def retry(self) -> Phase | None:
        r = self._round
        if r is None or next_phase(r.phase, Action.RETRY) is None:
            return self.phase
        r.phase, r.error = Phase.LOADING, None
        return await self.load()

    # ------------ player input --------------

    def place_guess(self, point: GuessPoint) -> bool:
        r = self._round
        nxt = next_phase(r.phase, Action.GUESS) if r else None
        if nxt is None:
            return False
        replaced = r.guess is not None
        r.guess, r.phase = point, nxt
        self._hooks.guess(round_index=r.index, lat=point.lat, lon=point.lon, replaced=replaced)
        return True

    def submit(self) -> RoundResult | None:
        r = self._round
        if r is None:
            return None
        if r.phase is Phase.SUBMITTED:
            return r.result
        nxt = next_phase(r.phase, Action.SUBMIT)
        if nxt is None or r.guess is None or r.geometry is None:
            return None

        projection = project(r.geometry, r.guess)
        result = RoundResult(r.street_name, to_error_km(projection.distance_m))
        self.session.record(result)
        r.projection, r.result, r.phase = projection, result, nxt
        self._hooks.submitted(
            GuessSubmitted(
                round_index=r.index,
                street_name=r.street_name,
                guess_lat=r.guess.lat,
                guess_lon=r.guess.lon,
                snapped_lat=projection.point.lat,
                snapped_lon=projection.point.lon,
                distance_m=projection.distance_m,
                error_km=result.error_km,
            )
        )
        return result

    def advance(self) -> Phase | None:
        r = self._round
        if r is None or next_phase(r.phase, Action.ADVANCE) is None:
            return self.phase
        if self.session.advance():
            r.phase = next_phase(r.phase, Action.FINISH)
            self._hooks.completed(
                GameCompleted(rounds=self.session.round_count, total_km=self.session.total_km)
            )
        else:
            self._open_round()
        return self._round.phase

    async def next_round(self) -> Phase | None:
        """advance() and, when a new round opened, load its geometry."""
        phase = self.advance()
        if phase is Phase.LOADING:
            return await self.load()
        return phase

    # ------------ UI boundary --------------

    def view(self) -> RoundView:
        r, s = self._round, self.session
        if r is None:
            raise RuntimeError("no game started")
        complete = r.phase is Phase.COMPLETE
        return RoundView(
            round_index=r.index,
            round_count=s.round_count,
            street_name=None if complete else r.street_name,
            phase=r.phase,
            geometry=r.geometry,
            guess=r.guess,
            projection=r.projection,
            error=r.error,
            results=s.results,
            total_km=s.total_km,
        )
