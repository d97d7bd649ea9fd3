# tests/domain/test_session.py
import numpy as np
import pytest

from street_quiz.domain.errors import InsufficientPool
from street_quiz.domain.projection import to_error_km
from street_quiz.domain.state import GameSession, RoundResult
from street_quiz.runtime.rng import RNGRegistry

POOL = [
    "Avenida de Mayo",
    "Avenida Corrientes",
    "Avenida Santa Fe",
    "Calle Florida",
    "Avenida Rivadavia",
    "Avenida Callao",
]


def _session(seed=1) -> GameSession:
    return GameSession(rng=np.random.default_rng(seed))


def test_pool_of_exact_size_selects_every_name_once():
    s = _session()
    s.start(POOL, len(POOL))
    assert sorted(s.names) == sorted(POOL)
    assert s.round_index == 0 and s.current_name == s.names[0]


def test_insufficient_pool_fails_fast():
    s = _session()
    with pytest.raises(InsufficientPool):
        s.start(POOL[:2], 3)
    # duplicates do not count twice
    with pytest.raises(InsufficientPool):
        s.start(["Calle Florida", "Calle Florida", "Avenida Callao"], 3)
    assert not s.started


def test_sampling_is_deterministic_under_a_seed():
    a = GameSession(rng=RNGRegistry(7, game="ba").stream("names"))
    b = GameSession(rng=RNGRegistry(7, game="ba").stream("names"))
    a.start(POOL, 4)
    b.start(POOL, 4)
    assert a.names == b.names
    assert len(set(a.names)) == 4 and set(a.names) <= set(POOL)


def test_total_is_exact_sum_and_advance_after_last_round_completes():
    s = _session()
    s.start(POOL, 3)
    for err in (0.3, 1.2, 0.0):
        s.record(RoundResult(s.current_name, err))
        done = s.advance()
    assert done and s.complete
    assert s.current_name is None
    assert s.total_km == 1.5
    assert [r.error_km for r in s.results] == [0.3, 1.2, 0.0]


def test_total_tracks_live_sum_after_every_record():
    s = _session()
    s.start(POOL, 5)
    seen = []
    for err in (0.1, 0.2, 2.7, 13.4, 0.6):
        s.record(RoundResult(s.current_name, err))
        seen.append(err)
        assert s.total_km == pytest.approx(sum(seen))
        assert s.total_km == round(sum(seen), 1)
        s.advance()


def test_total_uses_the_rounded_per_round_errors():
    s = _session()
    s.start(POOL, 4)
    for meters in (150.0, 250.0, 350.0, 450.0):
        s.record(RoundResult(s.current_name, to_error_km(meters)))
        s.advance()
    assert [r.error_km for r in s.results] == [0.2, 0.3, 0.4, 0.5]
    assert s.total_km == 1.4


def test_one_result_per_round():
    s = _session()
    s.start(POOL, 2)
    s.record(RoundResult(s.current_name, 1.0))
    with pytest.raises(RuntimeError):
        s.record(RoundResult(s.current_name, 2.0))
    assert s.total_km == 1.0


def test_round_token_changes_on_every_round_change():
    s = _session()
    s.start(POOL, 2)
    seen = {s.round_token}
    s.advance()
    seen.add(s.round_token)
    s.restart()
    seen.add(s.round_token)
    assert len(seen) == 3


def test_restart_discards_results_and_resamples():
    s = _session()
    s.start(POOL, 3)
    s.record(RoundResult(s.current_name, 4.2))
    s.advance()
    s.restart()
    assert s.round_index == 0 and not s.complete
    assert s.results == () and s.total_km == 0.0
    assert len(s.names) == 3 and set(s.names) <= set(POOL)


def test_restart_requires_start():
    with pytest.raises(RuntimeError):
        _session().restart()
