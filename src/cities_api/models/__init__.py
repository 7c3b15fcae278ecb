"""SQLAlchemy models for the Cities API."""

from cities_api.models.city import City

__all__ = ["City"]
