"""Pydantic schemas for the Cities API."""

from cities_api.schemas.city import (
    CitiesResponse,
    CityResponse,
    ErrorResponse,
    Feature,
    FeatureProperties,
    ImportRequest,
    ImportResponse,
    PointGeometry,
    StatusResponse,
)

__all__ = [
    "CitiesResponse",
    "CityResponse",
    "ErrorResponse",
    "Feature",
    "FeatureProperties",
    "ImportRequest",
    "ImportResponse",
    "PointGeometry",
    "StatusResponse",
]
