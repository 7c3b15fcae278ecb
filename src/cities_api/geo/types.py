"""Core geometry types used across the application."""

from dataclasses import dataclass
from typing import NamedTuple


class Coordinate(NamedTuple):
    """A WGS84 position in decimal degrees, longitude first."""

    lon: float
    lat: float


Ring = list[tuple[float, float]]


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box in latitude/longitude degrees.

    ``min_lon`` is greater than ``max_lon`` when the box wraps across the
    antimeridian.
    """

    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float

    @property
    def crosses_antimeridian(self) -> bool:
        return self.min_lon > self.max_lon

    def to_ring(self) -> Ring:
        """Closed polygon ring of ``(lon, lat)`` pairs, counter-clockwise."""
        return [
            (self.min_lon, self.min_lat),
            (self.max_lon, self.min_lat),
            (self.max_lon, self.max_lat),
            (self.min_lon, self.max_lat),
            (self.min_lon, self.min_lat),
        ]

    def contains(self, coordinate: Coordinate) -> bool:
        """Whether the coordinate lies inside the box, edges included."""
        if not self.min_lat <= coordinate.lat <= self.max_lat:
            return False
        if self.crosses_antimeridian:
            return coordinate.lon >= self.min_lon or coordinate.lon <= self.max_lon
        return self.min_lon <= coordinate.lon <= self.max_lon

    def contains_box(self, other: "BoundingBox") -> bool:
        """Whether ``other`` lies entirely inside this box."""
        if not (self.min_lat <= other.min_lat and other.max_lat <= self.max_lat):
            return False
        if self.min_lon <= -180.0 and self.max_lon >= 180.0:
            return True
        if not self.crosses_antimeridian:
            return (
                not other.crosses_antimeridian
                and self.min_lon <= other.min_lon
                and other.max_lon <= self.max_lon
            )
        if other.crosses_antimeridian:
            return other.min_lon >= self.min_lon and other.max_lon <= self.max_lon
        # Wrapped box: ``other`` must sit on one side of the antimeridian
        return other.min_lon >= self.min_lon or other.max_lon <= self.max_lon
