"""Bounding box around a point for a search radius in kilometres.

Uses a spherical earth. The box is the smallest latitude/longitude rectangle
that contains every point within ``radius_km`` of the centre, so it is meant
as a coarse filter for a spatial index rather than an exact distance test.
"""

import math

from cities_api.geo.types import BoundingBox

EARTH_RADIUS_KM = 6371.01

MIN_LAT = math.radians(-90)
MAX_LAT = math.radians(90)
MIN_LON = math.radians(-180)
MAX_LON = math.radians(180)


def compute_bounding_box(lon: float, lat: float, radius_km: float) -> BoundingBox:
    """Compute the bounding box of a circle of ``radius_km`` around ``(lon, lat)``.

    Longitudes that overflow the antimeridian are wrapped, giving a box with
    ``min_lon > max_lon``. When the circle reaches a pole the box becomes a
    full longitude band clamped at that pole.

    Raises:
        ValueError: If ``radius_km`` is negative or not finite.
    """
    if not math.isfinite(radius_km) or radius_km < 0:
        raise ValueError(f"radius must be a non-negative finite number, got {radius_km}")

    angular_distance = radius_km / EARTH_RADIUS_KM

    lon_rad = math.radians(lon)
    lat_rad = math.radians(lat)

    min_lat = lat_rad - angular_distance
    max_lat = lat_rad + angular_distance

    if min_lat > MIN_LAT and max_lat < MAX_LAT:
        delta_lon = math.asin(math.sin(angular_distance) / math.cos(lat_rad))

        min_lon = lon_rad - delta_lon
        if min_lon < MIN_LON:
            min_lon += 2 * math.pi

        max_lon = lon_rad + delta_lon
        if max_lon > MAX_LON:
            max_lon -= 2 * math.pi
    else:
        min_lat = max(min_lat, MIN_LAT)
        max_lat = min(max_lat, MAX_LAT)
        min_lon = MIN_LON
        max_lon = MAX_LON

    return BoundingBox(
        min_lat=math.degrees(min_lat),
        min_lon=math.degrees(min_lon),
        max_lat=math.degrees(max_lat),
        max_lon=math.degrees(max_lon),
    )
