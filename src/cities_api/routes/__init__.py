"""API routes for the Cities API."""

from cities_api.routes.cities import router as cities_router

__all__ = ["cities_router"]
