"""Geometry helpers: coordinates, bounding boxes and WKB encoding."""

from cities_api.geo.bounding_box import EARTH_RADIUS_KM, compute_bounding_box
from cities_api.geo.codec import decode_point, encode_geometry, encode_point
from cities_api.geo.types import BoundingBox, Coordinate, Ring

__all__ = [
    "EARTH_RADIUS_KM",
    "BoundingBox",
    "Coordinate",
    "Ring",
    "compute_bounding_box",
    "decode_point",
    "encode_geometry",
    "encode_point",
]
