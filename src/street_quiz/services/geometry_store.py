# street_quiz/services/geometry_store.py
import asyncio
import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from street_quiz.app.protocols import GeometrySource, RememberingSource
from street_quiz.domain.entities.geography import Geometry
from street_quiz.domain.errors import NotFound
from street_quiz.io.datasets import load_geometry_document
from street_quiz.io.geojson import parse_geometry
from street_quiz.io.overpass import OverpassClient

log = logging.getLogger(__name__)


class PrecomputedSource(GeometrySource):
    """Lookup in the precomputed name -> geometry document, read on first use."""

    def __init__(self, loader: Callable[[], Mapping]):
        self._loader = loader
        self._doc: Mapping | None = None

    @classmethod
    def from_file(cls, file: str | Path) -> "PrecomputedSource":
        return cls(lambda: load_geometry_document(file))

    @classmethod
    def from_mapping(cls, doc: Mapping) -> "PrecomputedSource":
        return cls(lambda: doc)

    async def _document(self) -> Mapping:
        if self._doc is None:
            doc = await asyncio.to_thread(self._loader)
            if not doc:
                return doc  # empty (possibly a failed read): try again next time
            self._doc = doc
        return self._doc

    async def lookup(self, street_name: str) -> Geometry | None:
        entry = (await self._document()).get(street_name)
        if entry is None:
            return None
        geometry = parse_geometry(entry)
        if geometry is None:
            log.warning("malformed precomputed entry for %r, falling back", street_name)
        return geometry


class MemorySource(RememberingSource):
    """Process-local cache of geometries resolved by later tiers."""

    def __init__(self):
        self._cache: dict[str, Geometry] = {}

    async def lookup(self, street_name: str) -> Geometry | None:
        return self._cache.get(street_name)

    def remember(self, street_name: str, geometry: Geometry) -> None:
        self._cache[street_name] = geometry

    def __len__(self) -> int:
        return len(self._cache)


class OverpassSource(GeometrySource):
    """Authoritative last tier: raises NotFound instead of returning None."""

    def __init__(self, client: OverpassClient):
        self.client = client

    async def lookup(self, street_name: str) -> Geometry | None:
        return await self.client.street_geometry(street_name)


class TieredGeometryStore:
    """Try each source in order; first geometry wins."""

    def __init__(self, *sources: GeometrySource):
        if not sources:
            raise ValueError("TieredGeometryStore needs at least one source")
        self.sources = sources

    async def resolve(self, street_name: str) -> Geometry:
        for i, src in enumerate(self.sources):
            geometry = await src.lookup(street_name)
            if geometry is None:
                continue
            log.debug("resolved %r via %s", street_name, type(src).__name__)
            for earlier in self.sources[:i]:
                if isinstance(earlier, RememberingSource):
                    earlier.remember(street_name, geometry)
            return geometry
        raise NotFound(street_name)
