# street_quiz/io/geojson.py
import logging
from collections.abc import Iterable
from typing import Any

from street_quiz.domain.entities.geography import Geometry

log = logging.getLogger(__name__)


def _clean_lines(lines: Iterable[Any]) -> list[list[tuple[float, float]]]:
    out = []
    for line in lines:
        pts = [(float(p[0]), float(p[1])) for p in line]
        if len(pts) >= 2:
            out.append(pts)
    return out


def _lines_of(obj: Any) -> list:
    if isinstance(obj, dict):
        kind = obj.get("type")
        if kind == "Feature":
            return _lines_of(obj.get("geometry"))
        if kind == "MultiLineString":
            return obj["coordinates"]
        if kind == "LineString":
            return [obj["coordinates"]]
        raise ValueError(f"unsupported geometry type {kind!r}")
    if isinstance(obj, list):
        return obj  # bare coordinate set: [[[lon, lat], ...], ...]
    raise ValueError(f"unsupported geometry value {type(obj).__name__}")


def parse_geometry(obj: Any) -> Geometry | None:
    """
    Normalize a precomputed entry into a Geometry.

    Accepts a GeoJSON Feature, a MultiLineString/LineString object, or a bare
    list of lines. Lines with fewer than two points are dropped. Returns None
    for anything that does not yield at least one line.
    """
    try:
        lines = _clean_lines(_lines_of(obj))
    except (KeyError, TypeError, ValueError, IndexError) as exc:
        log.debug("unparseable geometry entry: %s", exc)
        return None
    if not lines:
        return None
    return Geometry.from_coords(lines)


def parse_overpass_elements(elements: Iterable[dict]) -> Geometry | None:
    """Ways carrying `out geom` vertices ({"lat", "lon"} dicts) -> one line per way."""
    lines = []
    for el in elements:
        if el.get("type") != "way" or not el.get("geometry"):
            continue
        lines.append([(pt["lon"], pt["lat"]) for pt in el["geometry"]])
    lines = _clean_lines(lines)
    return Geometry.from_coords(lines) if lines else None
