"""
Unit tests for NutritionUseCase.

Tests cover:
- Barcode lookup through the local cache and Open Food Facts
- Search merging of local and remote results
- Upstream and store failures
"""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from application.exceptions import InvalidInputError, NotFoundError, UpstreamServiceError
from application.use_cases.nutrition import NutritionUseCase, merge_results, stored_item
from backend.services.openfoodfacts_client import OpenFoodFactsClient
from domain.models.nutrition import NormalizedFoodItem
from tests.fakes import FakeFoodItemRepository, FakeOpenFoodFactsClient, off_product


BARCODE = "3017620422003"


@pytest.fixture
def food_repo():
    return FakeFoodItemRepository()


@pytest.fixture
def off_client():
    return FakeOpenFoodFactsClient()


@pytest.fixture
def use_case(food_repo, off_client):
    return NutritionUseCase(food_repo, off_client)


def _local_item(name, barcode=None, brand=None, calories=100.0):
    return {
        "barcode": barcode,
        "name": name,
        "brand": brand,
        "calories_per_serving": calories,
        "source": "openfoodfacts",
    }


@pytest.mark.unit
class TestLookupBarcode:
    @pytest.mark.asyncio
    async def test_fetches_normalizes_and_stores(self, use_case, food_repo, off_client):
        off_client.products[BARCODE] = off_product(BARCODE)

        result = await use_case.lookup_barcode(BARCODE)

        assert result.cached is False
        assert result.item.name == "Hazelnut Spread"
        assert result.item.brand == "Acme"
        assert result.item.serving_size_g == 15.0
        assert result.item.calories_per_serving == 80.85
        assert result.item.id == food_repo.items[0]["id"]
        assert off_client.lookups == [BARCODE]

    @pytest.mark.asyncio
    async def test_cached_item_skips_remote(self, use_case, food_repo, off_client):
        food_repo.seed([_local_item("Cached Spread", barcode=BARCODE)])

        result = await use_case.lookup_barcode(BARCODE)

        assert result.cached is True
        assert result.item.name == "Cached Spread"
        assert off_client.lookups == []

    @pytest.mark.asyncio
    async def test_refresh_updates_existing_row(self, use_case, food_repo, off_client):
        food_repo.seed([{**_local_item("Old Name", barcode=BARCODE), "id": "food-1"}])
        off_client.products[BARCODE] = off_product(BARCODE, name="New Name")

        result = await use_case.lookup_barcode(BARCODE, refresh=True)

        assert result.cached is False
        assert result.item.id == "food-1"
        assert result.item.name == "New Name"
        assert len(food_repo.items) == 1

    @pytest.mark.asyncio
    async def test_empty_code(self, use_case):
        with pytest.raises(InvalidInputError):
            await use_case.lookup_barcode("  ")

    @pytest.mark.asyncio
    async def test_unknown_product(self, use_case):
        with pytest.raises(NotFoundError, match="Product not found"):
            await use_case.lookup_barcode("000")

    @pytest.mark.asyncio
    async def test_product_without_name(self, use_case, off_client, food_repo):
        off_client.products[BARCODE] = off_product(BARCODE, name=None)

        with pytest.raises(NotFoundError, match="has no name"):
            await use_case.lookup_barcode(BARCODE)
        assert food_repo.items == []

    @pytest.mark.asyncio
    async def test_upstream_unavailable(self, use_case, off_client):
        off_client.unavailable = True
        with pytest.raises(UpstreamServiceError, match="Failed to look up product"):
            await use_case.lookup_barcode(BARCODE)

    @pytest.mark.asyncio
    async def test_store_failure(self, use_case, off_client, food_repo):
        off_client.products[BARCODE] = off_product(BARCODE)
        food_repo.fail_writes = True

        with pytest.raises(UpstreamServiceError, match="Failed to save product"):
            await use_case.lookup_barcode(BARCODE)


@pytest.mark.unit
class TestSearchFood:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", [None, "", " a "])
    async def test_short_query(self, use_case, query):
        with pytest.raises(InvalidInputError, match="at least 2 characters"):
            await use_case.search_food(query)

    @pytest.mark.asyncio
    async def test_enough_local_results_skip_remote(self, use_case, food_repo, off_client):
        food_repo.seed([_local_item(f"Oat Bar {i}") for i in range(8)])

        result = await use_case.search_food("oat")

        assert len(result.items) == 8
        assert result.local_count == 8
        assert off_client.searches == []

    @pytest.mark.asyncio
    async def test_local_first_then_remote(self, use_case, food_repo, off_client):
        food_repo.seed([_local_item("Oat Milk", barcode="111", brand="Acme")])
        off_client.search_results = [
            off_product("111", name="Oat Milk"),
            off_product("222", name="Oat Flakes"),
        ]

        result = await use_case.search_food("oat")

        assert [item.barcode for item in result.items] == ["111", "222"]
        assert result.items[0].id is not None
        assert result.local_count == 1
        assert result.remote_count == 2

    @pytest.mark.asyncio
    async def test_remote_items_need_name_and_calories(self, use_case, off_client):
        off_client.search_results = [
            off_product("111", name=None),
            off_product("222", name="Oat Water", nutriments={}),
            off_product("333", name="Oat Bar"),
        ]

        result = await use_case.search_food("oat")

        assert [item.barcode for item in result.items] == ["333"]

    @pytest.mark.asyncio
    async def test_remote_failure_returns_local_only(self, use_case, food_repo, off_client):
        food_repo.seed([_local_item("Oat Milk")])
        off_client.unavailable = True

        result = await use_case.search_food("oat")

        assert [item.name for item in result.items] == ["Oat Milk"]
        assert result.remote_count == 0


@pytest.mark.unit
class TestMergeResults:
    def test_dedupes_by_name_and_brand_when_no_barcode(self):
        local = [NormalizedFoodItem(name="Oat Milk", brand="Acme")]
        remote = [
            NormalizedFoodItem(name="oat milk ", brand="ACME"),
            NormalizedFoodItem(name="Oat Milk", brand="Other"),
        ]

        merged = merge_results(local, remote)

        assert [item.brand for item in merged] == ["Acme", "Other"]

    def test_limit(self):
        items = [NormalizedFoodItem(name=f"Item {i}", barcode=str(i)) for i in range(30)]
        assert len(merge_results(items, [])) == 20


def _http_client_returning(mock_client_class, response=None, side_effect=None):
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=response, side_effect=side_effect)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    mock_client_class.return_value = mock_client


def _rate_limit_page():
    response = MagicMock()
    response.status_code = 200
    response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>rate limited</html>", 0)
    response.text = "<html>rate limited</html>"
    return response


@pytest.mark.unit
class TestUnreliableOpenFoodFacts:
    """The real HTTP client's failures degrade like the fake's."""

    @pytest.fixture
    def http_use_case(self, food_repo):
        return NutritionUseCase(food_repo, OpenFoodFactsClient(base_url="https://off.test"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response,error", [
        (None, httpx.ReadError("reset")),
        (_rate_limit_page(), None),
    ])
    async def test_search_returns_local_results(self, http_use_case, food_repo, response, error):
        food_repo.seed([_local_item("Oats")])

        with patch("httpx.AsyncClient") as mock_client_class:
            _http_client_returning(mock_client_class, response, error)
            result = await http_use_case.search_food("oats")

        assert [item.name for item in result.items] == ["Oats"]
        assert result.remote_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response,error", [
        (None, httpx.RemoteProtocolError("peer closed connection")),
        (_rate_limit_page(), None),
    ])
    async def test_lookup_reports_upstream_error(self, http_use_case, response, error):
        with patch("httpx.AsyncClient") as mock_client_class:
            _http_client_returning(mock_client_class, response, error)
            with pytest.raises(UpstreamServiceError, match="Failed to look up product"):
                await http_use_case.lookup_barcode(BARCODE)


@pytest.mark.unit
class TestStoredRows:
    @pytest.mark.asyncio
    async def test_cached_row_with_null_calories(self, use_case, food_repo):
        food_repo.seed([_local_item("Plain Water", barcode=BARCODE, calories=None)])

        result = await use_case.lookup_barcode(BARCODE)

        assert result.item.calories_per_serving == 0.0

    @pytest.mark.asyncio
    async def test_search_row_with_null_calories(self, use_case, food_repo, off_client):
        food_repo.seed([_local_item("Oat Water", calories=None)])
        off_client.unavailable = True

        result = await use_case.search_food("oat")

        assert result.items[0].calories_per_serving == 0.0

    def test_stored_item_keeps_values(self):
        item = stored_item({"name": "Oats", "calories_per_serving": 150.5, "protein_g": 5.0})
        assert item.calories_per_serving == 150.5
        assert item.protein_g == 5.0
