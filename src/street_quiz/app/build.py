# street_quiz/app/build.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from street_quiz.app.hooks import NoopHooks
from street_quiz.app.round import Phase, RoundEngine
from street_quiz.config.models import QuizModel
from street_quiz.domain.state import GameSession
from street_quiz.io.datasets import load_name_pool
from street_quiz.io.game_logging import GameLogging  # JSON logs
from street_quiz.io.recorder import JsonlSink, Recorder, Sink
from street_quiz.runtime.registries import make_tier
from street_quiz.runtime.rng import RNGRegistry
from street_quiz.services.geometry_store import TieredGeometryStore


@dataclass
class App:
    config: QuizModel
    rng: RNGRegistry
    store: TieredGeometryStore
    session: GameSession
    engine: RoundEngine
    recorder: Recorder | None

    def start(self, pool: Sequence[str] | None = None) -> Phase:
        """Start a game from `pool`, or from the configured name pool file."""
        if pool is None:
            pool = load_name_pool(self.config.data.names_file)
        return self.engine.start(pool, self.config.rounds)


def build(
    cfg: QuizModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: Sequence[Sink] | None = None,
    transport=None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, QuizModel) else QuizModel.model_validate(cfg)

    # 1) RNG
    rng_registry = RNGRegistry(model.seed, game=model.name)

    # 2) Geometry tiers, in order
    deps = {"geometries_file": model.data.geometries_file, "transport": transport}
    store = TieredGeometryStore(*(make_tier(t, deps=deps) for t in model.tiers))

    # 3) Hooks
    recorder = None
    if use_logging:
        recorder = Recorder(*(sinks if sinks is not None else [JsonlSink()]))
        hooks = GameLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
    else:
        hooks = NoopHooks()

    # 4) Session & engine
    session = GameSession(rng=rng_registry.stream("names"))
    engine = RoundEngine(session, store, hooks=hooks)

    return App(model, rng_registry, store, session, engine, recorder)
