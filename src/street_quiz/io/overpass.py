# street_quiz/io/overpass.py
"""Live street geometry from the Overpass API."""

import logging

import httpx

from street_quiz.domain.entities.geography import Geometry
from street_quiz.domain.errors import GeometryUnavailable, NotFound
from street_quiz.io.geojson import parse_overpass_elements

log = logging.getLogger(__name__)

OVERPASS_URL = "https://overpass-api.de/api/interpreter"
DEFAULT_AREA = "Ciudad Autónoma de Buenos Aires"


def _ql_str(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"')


def street_query(street_name: str, area_name: str) -> str:
    return (
        "[out:json];\n"
        f'area[name="{_ql_str(area_name)}"]->.searchArea;\n'
        f'way(area.searchArea)["name"="{_ql_str(street_name)}"];\n'
        "out geom;\n"
    )


class OverpassClient:
    def __init__(
        self,
        *,
        url: str = OVERPASS_URL,
        area_name: str = DEFAULT_AREA,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url, self.area_name, self.timeout_s = url, area_name, timeout_s
        self.transport = transport
        self.requests = 0

    async def _post(self, query: str) -> dict:
        self.requests += 1
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            response = await client.post(self.url, data={"data": query})
            response.raise_for_status()
            return response.json()

    async def street_geometry(self, street_name: str) -> Geometry:
        log.debug("overpass lookup %r in %r", street_name, self.area_name)
        try:
            body = await self._post(street_query(street_name, self.area_name))
            geometry = parse_overpass_elements(body.get("elements", []))
        except httpx.HTTPStatusError as exc:
            raise GeometryUnavailable(
                street_name, f"Overpass responded with HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise GeometryUnavailable(street_name, f"{type(exc).__name__}: {exc}") from exc
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise GeometryUnavailable(street_name, f"bad Overpass response: {exc}") from exc
        if geometry is None:
            raise NotFound(street_name)
        return geometry
