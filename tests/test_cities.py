"""Tests for city lookup and proximity endpoints."""

import pytest
from httpx import AsyncClient

from cities_api.database import Store
from cities_api.geo.codec import encode_point
from cities_api.geo.types import Coordinate
from cities_api.models.city import City as CityModel

AMHERSTBURG = {
    "cartodb_id": 42,
    "name": "Amherstburg",
    "population": 8921,
    "coordinates": [-83.108128, 42.100072],
}


class TestGetCity:
    """Tests for GET /id/{id} without a distance."""

    @pytest.mark.asyncio
    async def test_found_id(self, client: AsyncClient):
        """Existing city returns 200 with its exact data."""
        response = await client.get("/id/42")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == AMHERSTBURG

    @pytest.mark.asyncio
    async def test_not_found_id(self, client: AsyncClient):
        """Unknown city returns 404 naming the id."""
        response = await client.get("/id/4234534")
        assert response.status_code == 404
        assert response.json() == {"error": "City with id 4234534 not found"}

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_unknown_route(self, client: AsyncClient):
        """Ids must be digits; anything else does not match the route."""
        response = await client.get("/id/rt23u")
        assert response.status_code == 404
        assert response.json() == {"error": "Route GET /id/rt23u not found"}

    @pytest.mark.asyncio
    async def test_unknown_query_param(self, client: AsyncClient):
        response = await client.get("/id/42?dedo=67")
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown query string parameters"}


class TestGetCityWithDist:
    """Tests for GET /id/{id}?dist=..."""

    @pytest.mark.asyncio
    async def test_invalid_dist(self, client: AsyncClient):
        """Non-numeric dist returns 400 naming the value and the parameter."""
        response = await client.get("/id/42?dist=ideij")
        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid uint query string value 'ideij' for parameter 'dist'"
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["-4", "+4", "4.5", "", "1e3", "18446744073709551616"])
    async def test_dist_must_be_uint64(self, client: AsyncClient, value: str):
        response = await client.get("/id/42", params={"dist": value})
        assert response.status_code == 400
        assert f"'{value}'" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_very_long_dist(self, client: AsyncClient):
        """Digit strings far past uint64 are a bad parameter, not a server error."""
        value = "1" * 5000
        response = await client.get("/id/42", params={"dist": value})
        assert response.status_code == 400
        assert response.json() == {
            "error": f"Invalid uint query string value '{value}' for parameter 'dist'"
        }

    @pytest.mark.asyncio
    async def test_dist_with_leading_zeros(self, client: AsyncClient):
        response = await client.get("/id/42", params={"dist": "0" * 5000 + "1"})
        assert response.status_code == 200
        assert response.json() == {"cities": [AMHERSTBURG]}

    @pytest.mark.asyncio
    async def test_repeated_dist(self, client: AsyncClient):
        response = await client.get("/id/42?dist=4&dist=5")
        assert response.status_code == 400
        assert response.json() == {"error": "Too many values for parameter 'dist'"}

    @pytest.mark.asyncio
    async def test_extra_param_with_valid_dist(self, client: AsyncClient):
        """Any parameter besides dist rejects the request."""
        response = await client.get("/id/42?dist=10&fko=67")
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown query string parameters"}

    @pytest.mark.asyncio
    async def test_extra_param_with_invalid_dist(self, client: AsyncClient):
        response = await client.get("/id/42?dist=abc&extra=1")
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown query string parameters"}

    @pytest.mark.asyncio
    async def test_not_found_id_with_dist(self, client: AsyncClient):
        """Not found wins over dist handling."""
        response = await client.get("/id/4234534?dist=4")
        assert response.status_code == 404
        assert response.json() == {"error": "City with id 4234534 not found"}

    @pytest.mark.asyncio
    async def test_not_found_id_with_invalid_dist(self, client: AsyncClient):
        response = await client.get("/id/4234534?dist=ideij&extra=1")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_dist_zero_returns_singleton_collection(self, client: AsyncClient):
        """dist=0 wraps the city in a collection; no dist returns the city itself."""
        plain = await client.get("/id/42")
        zero = await client.get("/id/42?dist=0")
        assert plain.status_code == 200
        assert zero.status_code == 200
        assert plain.json() == AMHERSTBURG
        assert zero.json() == {"cities": [AMHERSTBURG]}

    @pytest.mark.asyncio
    async def test_cities_around(self, client: AsyncClient):
        """Exactly the cities inside the 4 km box come back, in any order."""
        response = await client.get("/id/123?dist=4")
        assert response.status_code == 200

        expected = {
            134: {
                "cartodb_id": 134,
                "name": "Bradley",
                "population": 2500,
                "coordinates": [-82.411366, 42.339783],
            },
            123: {
                "cartodb_id": 123,
                "name": "Jeannettes Creek",
                "population": 244,
                "coordinates": [-82.421253, 42.315238],
            },
            106: {
                "cartodb_id": 106,
                "name": "Lighthouse",
                "population": 410,
                "coordinates": [-82.452364, 42.290865],
            },
        }
        cities = response.json()["cities"]
        assert len(cities) == len(expected)
        assert {city["cartodb_id"]: city for city in cities} == expected

    @pytest.mark.asyncio
    async def test_cities_around_excludes_outside(self, client: AsyncClient):
        """Tilbury is about 6 km south of Jeannettes Creek."""
        response = await client.get("/id/123?dist=4")
        ids = {city["cartodb_id"] for city in response.json()["cities"]}
        assert 150 not in ids
        assert 42 not in ids

        wider = await client.get("/id/123?dist=10")
        wider_ids = {city["cartodb_id"] for city in wider.json()["cities"]}
        assert ids < wider_ids
        assert 150 in wider_ids

    @pytest.mark.asyncio
    async def test_isolated_city(self, client: AsyncClient):
        """A city with no neighbours finds only itself."""
        response = await client.get("/id/42?dist=1")
        assert response.status_code == 200
        assert response.json() == {"cities": [AMHERSTBURG]}


class TestCorruptGeometry:
    """Stored geometry that fails to decode."""

    @pytest.fixture
    async def corrupt_store(self, seeded_store: Store) -> Store:
        async with seeded_store.session_factory() as session:
            session.add(
                CityModel(
                    cartodb_id=999,
                    name="Broken",
                    population=1,
                    geo=b"\x01\x02\x03",
                    lon=10.0,
                    lat=10.0,
                )
            )
            await session.commit()
        return seeded_store

    @pytest.mark.asyncio
    async def test_lookup_returns_opaque_500(self, client: AsyncClient, corrupt_store: Store):
        response = await client.get("/id/999")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    @pytest.mark.asyncio
    async def test_one_bad_neighbour_fails_whole_query(
        self, client: AsyncClient, corrupt_store: Store
    ):
        async with corrupt_store.session_factory() as session:
            session.add(
                CityModel(
                    cartodb_id=998,
                    name="Healthy",
                    population=1,
                    geo=encode_point(Coordinate(10.0, 10.0)),
                    lon=10.0,
                    lat=10.0,
                )
            )
            await session.commit()

        assert (await client.get("/id/998")).status_code == 200
        response = await client.get("/id/998?dist=5")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
