"""City schemas - request and response bodies."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CityResponse(BaseModel):
    """A single city."""

    cartodb_id: int
    name: str
    population: int
    coordinates: list[float] = Field(
        ...,
        description="Point position as [longitude, latitude]",
    )


class CitiesResponse(BaseModel):
    """A collection of cities, in the order the store returned them."""

    cities: list[CityResponse]


class ErrorResponse(BaseModel):
    error: str


class StatusResponse(BaseModel):
    message: str


class ImportResponse(BaseModel):
    imported: int


class PointGeometry(BaseModel):
    """GeoJSON point geometry."""

    type: Literal["Point"]
    coordinates: list[float] = Field(..., min_length=2, max_length=3)

    @field_validator("coordinates")
    @classmethod
    def validate_range(cls, v: list[float]) -> list[float]:
        """Longitude must be within [-180, 180] and latitude within [-90, 90]."""
        lon, lat = v[0], v[1]
        if not -180 <= lon <= 180:
            raise ValueError(f"longitude {lon} out of range [-180, 180]")
        if not -90 <= lat <= 90:
            raise ValueError(f"latitude {lat} out of range [-90, 90]")
        return v


class FeatureProperties(BaseModel):
    """Properties of an imported city feature."""

    name: str = Field(..., min_length=1, max_length=255)
    place_key: str = Field(default="", max_length=255)
    capital: str = Field(default="", max_length=255)
    population: int = Field(default=0, ge=0, le=2**63 - 1)
    pclass: str = Field(default="", max_length=255)
    cartodb_id: int = Field(..., ge=0, le=2**63 - 1)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Feature(BaseModel):
    """A GeoJSON feature describing one city."""

    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: FeatureProperties


class ImportRequest(BaseModel):
    """A GeoJSON feature collection of cities."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature]
