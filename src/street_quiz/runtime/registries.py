# runtime/registries.py
from collections.abc import Callable

from street_quiz.app.protocols import GeometrySource
from street_quiz.config.models import (
    MemoryTierModel,
    OverpassTierModel,
    PrecomputedTierModel,
    TierUnion,
)
from street_quiz.io.overpass import OverpassClient
from street_quiz.services.geometry_store import MemorySource, OverpassSource, PrecomputedSource

TierFactory = Callable[[TierUnion, dict], GeometrySource]

_tier_registry: dict[str, TierFactory] = {}


def register_tier(kind: str):
    def deco(fn: TierFactory):
        _tier_registry[kind] = fn
        return fn

    return deco


def make_tier(cfg: TierUnion, *, deps: dict) -> GeometrySource:
    """
    deps can include:
      - 'geometries_file': default precomputed document path
      - 'transport': httpx transport for Overpass (tests)
    """
    try:
        factory = _tier_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown geometry tier kind {cfg.kind!r}")
    return factory(cfg, deps)


@register_tier("precomputed")
def _make_precomputed(cfg: PrecomputedTierModel, deps):
    file = cfg.file or deps.get("geometries_file")
    if file is None:
        raise ValueError("precomputed tier needs a file")
    return PrecomputedSource.from_file(file)


@register_tier("memory")
def _make_memory(cfg: MemoryTierModel, deps):
    return MemorySource()


@register_tier("overpass")
def _make_overpass(cfg: OverpassTierModel, deps):
    client = OverpassClient(
        url=cfg.url,
        area_name=cfg.area_name,
        timeout_s=cfg.timeout_s,
        transport=deps.get("transport"),
    )
    return OverpassSource(client)
