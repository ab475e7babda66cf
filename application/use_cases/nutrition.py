"""
Nutrition Lookup Use Cases.

Barcode lookup and food search over the local food_items cache, backed
by Open Food Facts. Remote products are normalized before they are
stored or returned.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from application.exceptions import InvalidInputError, NotFoundError, UpstreamServiceError
from application.ports import FoodItemRepository
from backend.core.nutrition_normalizer import normalize_product, product_display_name
from backend.services.openfoodfacts_client import OpenFoodFactsClient, OpenFoodFactsError
from domain.models.nutrition import NormalizedFoodItem

logger = logging.getLogger(__name__)

MAX_SEARCH_RESULTS = 20
LOCAL_RESULTS_SUFFICIENT = 8
REMOTE_PAGE_SIZE = 12
MIN_QUERY_LENGTH = 2


@dataclass
class BarcodeLookupResult:
    """Result of a barcode lookup."""
    item: NormalizedFoodItem
    cached: bool


@dataclass
class FoodSearchResult:
    """Result of a food search."""
    items: List[NormalizedFoodItem] = field(default_factory=list)
    local_count: int = 0
    remote_count: int = 0


def merge_results(
    local: List[NormalizedFoodItem],
    remote: List[NormalizedFoodItem],
    limit: int = MAX_SEARCH_RESULTS,
) -> List[NormalizedFoodItem]:
    """Local items first, then remote, dropping duplicates by barcode or name|brand."""
    seen = set()
    merged: List[NormalizedFoodItem] = []
    for item in list(local) + list(remote):
        key = item.dedupe_key()
        if key in seen:
            continue
        seen.add(key)
        merged.append(item)
    return merged[:limit]


def stored_item(row: Dict[str, Any]) -> NormalizedFoodItem:
    """Build an item from a food_items row; a NULL or negative calorie value reads as 0."""
    record = dict(row)
    record["calories_per_serving"] = max(0.0, float(record.get("calories_per_serving") or 0))
    return NormalizedFoodItem(**record)


class NutritionUseCase:
    """Use case for food barcode lookup and search."""

    def __init__(
        self,
        food_repo: FoodItemRepository,
        off_client: OpenFoodFactsClient,
    ):
        """
        Initialize with required dependencies.

        Args:
            food_repo: Local food item store
            off_client: Open Food Facts HTTP client
        """
        self._food_repo = food_repo
        self._off = off_client

    async def lookup_barcode(self, code: str, refresh: bool = False) -> BarcodeLookupResult:
        """
        Look up a product by barcode.

        The local store is used unless ``refresh`` is set; otherwise the
        product is fetched, normalized and stored.

        Raises:
            InvalidInputError: If the code is empty
            NotFoundError: If the product is unknown or has no name
            UpstreamServiceError: If the remote lookup or the store write fails
        """
        code = (code or "").strip()
        if not code:
            raise InvalidInputError("Barcode is required")

        existing = self._food_repo.get_by_barcode(code)
        if existing and not refresh:
            return BarcodeLookupResult(item=stored_item(existing), cached=True)

        try:
            product = await self._off.get_product(code)
        except OpenFoodFactsError as e:
            logger.error(f"Barcode lookup failed for {code}: {e}")
            raise UpstreamServiceError("Failed to look up product") from e

        if not product:
            raise NotFoundError("Product not found")
        if not product_display_name(product):
            raise NotFoundError("Product found but has no name")

        item = normalize_product(product, barcode=code)
        record = item.to_record()
        if existing:
            stored = self._food_repo.update(existing["id"], record)
        else:
            stored = self._food_repo.insert(record)
        if not stored:
            raise UpstreamServiceError("Failed to save product")

        return BarcodeLookupResult(item=stored_item(stored), cached=False)

    async def search_food(self, query: Optional[str]) -> FoodSearchResult:
        """
        Search foods by name or brand.

        Returns local matches alone when there are enough of them; otherwise
        adds Open Food Facts results. A failed remote search returns the local
        matches only.

        Raises:
            InvalidInputError: If the query is shorter than 2 characters
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise InvalidInputError("Query must be at least 2 characters")

        local = [
            stored_item(row)
            for row in self._food_repo.search(query, limit=MAX_SEARCH_RESULTS)
        ]
        if len(local) >= LOCAL_RESULTS_SUFFICIENT:
            return FoodSearchResult(items=local[:MAX_SEARCH_RESULTS], local_count=len(local))

        remote: List[NormalizedFoodItem] = []
        try:
            products = await self._off.search_products(query, page_size=REMOTE_PAGE_SIZE)
        except OpenFoodFactsError as e:
            logger.warning(f"Open Food Facts search failed for '{query}': {e}")
            products = []

        for product in products:
            if not product_display_name(product):
                continue
            item = normalize_product(product)
            if item.calories_per_serving > 0:
                remote.append(item)

        return FoodSearchResult(
            items=merge_results(local, remote),
            local_count=len(local),
            remote_count=len(remote),
        )
