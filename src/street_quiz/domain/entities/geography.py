from dataclasses import dataclass


# Core geometry types used by the quiz
@dataclass(frozen=True)
class LonLat:
    lon: float  # degrees, WGS84
    lat: float


@dataclass(frozen=True)
class GuessPoint:
    """A point picked by the player. Note the (lat, lon) order, as map widgets report it."""

    lat: float
    lon: float


@dataclass(frozen=True)
class Polyline:
    points: tuple[LonLat, ...]

    def __post_init__(self):
        if len(self.points) < 2:
            raise ValueError(f"polyline needs >= 2 points, got {len(self.points)}")


@dataclass(frozen=True)
class Geometry:
    """Real-world path(s) of a street: one or more disjoint polylines."""

    lines: tuple[Polyline, ...]

    @classmethod
    def from_coords(cls, coords) -> "Geometry":
        # coords: iterable of lines, each an iterable of (lon, lat)
        return cls(
            tuple(Polyline(tuple(LonLat(float(x), float(y)) for x, y in line)) for line in coords)
        )

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class Projection:
    point: GuessPoint  # nearest point on the geometry
    distance_m: float
    line_index: int
    segment_index: int
