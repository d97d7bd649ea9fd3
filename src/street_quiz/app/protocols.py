from typing import Protocol, runtime_checkable

from street_quiz.domain.entities.geography import Geometry


# ------------- Geometry resolution --------------------
@runtime_checkable
class GeometrySource(Protocol):
    """
    One tier of street geometry lookup.
    • Return the geometry for a name, or None to let the next tier try.
    • Raise NotFound / GeometryUnavailable only when the tier is authoritative.
    Coordinates are (lon, lat) degrees.
    """

    async def lookup(self, street_name: str) -> Geometry | None: ...


@runtime_checkable
class RememberingSource(GeometrySource, Protocol):
    """A tier that keeps what later tiers resolved."""

    def remember(self, street_name: str, geometry: Geometry) -> None: ...


@runtime_checkable
class GeometryResolver(Protocol):
    async def resolve(self, street_name: str) -> Geometry: ...
