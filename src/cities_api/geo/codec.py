"""WKB encoding of city point geometries.

Cities persist their location as a WKB point. Only single points are
supported; any other geometry type is rejected on both sides.
"""

import logging
from typing import Any

from shapely import wkb
from shapely.errors import GEOSException, ShapelyError
from shapely.geometry import Point, shape

from cities_api.exceptions import GeometryDecodeError, GeometryEncodeError
from cities_api.geo.types import Coordinate

logger = logging.getLogger(__name__)


def decode_point(data: bytes) -> Coordinate:
    """Decode WKB bytes into a coordinate.

    Raises:
        GeometryDecodeError: If the bytes are empty, truncated, not WKB, or
            encode anything other than a non-empty point.
    """
    if not data:
        raise GeometryDecodeError("error decoding geometry: empty buffer")

    try:
        geom = wkb.loads(bytes(data))
    except (GEOSException, ShapelyError, ValueError, TypeError) as e:
        raise GeometryDecodeError(f"error decoding geometry: {e}") from e

    if geom.geom_type != "Point":
        raise GeometryDecodeError(
            f"error decoding geometry: expected Point, got {geom.geom_type}"
        )
    if geom.is_empty:
        raise GeometryDecodeError("error decoding geometry: empty point")

    return Coordinate(lon=geom.x, lat=geom.y)


def encode_point(coordinate: Coordinate) -> bytes:
    """Encode a coordinate as WKB bytes."""
    lon, lat = coordinate
    try:
        return wkb.dumps(Point(lon, lat))
    except (GEOSException, ShapelyError, ValueError, TypeError) as e:
        raise GeometryEncodeError(f"error encoding point {coordinate}: {e}") from e


def encode_geometry(geometry: dict[str, Any]) -> bytes:
    """Encode a GeoJSON-like point geometry as WKB bytes.

    Raises:
        GeometryEncodeError: If the geometry is not a valid GeoJSON point.
    """
    geom_type = geometry.get("type")
    if geom_type != "Point":
        raise GeometryEncodeError(f"unsupported geometry type: {geom_type}")

    try:
        geom = shape(geometry)
    except (GEOSException, ShapelyError, ValueError, TypeError, KeyError, IndexError) as e:
        raise GeometryEncodeError(f"invalid point geometry: {e}") from e

    if geom.is_empty:
        raise GeometryEncodeError("invalid point geometry: empty point")

    return encode_point(Coordinate(lon=geom.x, lat=geom.y))
