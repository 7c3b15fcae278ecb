"""Data access layer for the Cities API."""

from cities_api.repositories import city

__all__ = ["city"]
