# runtime/rng.py
from __future__ import annotations

from collections.abc import Sequence
from functools import cache
from typing import TypeVar
from zlib import crc32

import numpy as np

T = TypeVar("T")


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _crc32_u32(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


class RNGRegistry:
    """
    Deterministic registry of named numpy.random.Generator streams.
    Derivation path: [master_seed, game, stream name]
    """

    def __init__(self, master_seed: int, *, game: str | int = 0):
        self.master_seed = _u32(master_seed)
        self.game_tag = _crc32_u32(str(game))

    @cache
    def stream(self, name: str) -> np.random.Generator:
        """Get (and cache) a named generator, e.g. reg.stream("names")."""
        ss = np.random.SeedSequence(entropy=[self.master_seed, self.game_tag, _crc32_u32(name)])
        return np.random.Generator(np.random.PCG64(ss))


def sample_without_replacement(items: Sequence[T], k: int, rng: np.random.Generator) -> list[T]:
    """
    Uniform k-sample of `items`, in draw order.

    Partial Fisher-Yates: position i swaps with a uniform pick from [i, n), so
    only k draws are taken from `rng` and every k-permutation is equally likely.
    Same generator state in => same sample out.
    """
    n = len(items)
    if not 0 <= k <= n:
        raise ValueError(f"cannot draw {k} of {n} items")
    pool = list(items)
    for i in range(k):
        j = int(rng.integers(i, n))
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:k]
