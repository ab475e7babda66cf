"""
HTTP client for the Open Food Facts API.

Looks up products by barcode and runs text searches. Responses are raw
product records; normalization happens in backend.core.nutrition_normalizer.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    "product_name,product_name_en,brands,serving_size,serving_quantity,"
    "nutrition_data_per,code,nutriments"
)


class OpenFoodFactsError(Exception):
    """Base exception for Open Food Facts client errors."""

    pass


class OpenFoodFactsUnavailable(OpenFoodFactsError):
    """Raised when Open Food Facts is unreachable or times out."""

    pass


class OpenFoodFactsAPIError(OpenFoodFactsError):
    """Raised when Open Food Facts returns an error response."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class OpenFoodFactsClient:
    """
    HTTP client for Open Food Facts.

    Each call opens a short-lived httpx.AsyncClient with the configured
    User-Agent, as the public API asks.
    """

    def __init__(
        self,
        base_url: str = "https://world.openfoodfacts.org",
        user_agent: str = "FitHub/1.0 (nutrition tracker; contact@fithub.app)",
        timeout: float = 10.0,
        search_timeout: float = 1.6,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root (e.g., "https://world.openfoodfacts.org")
            user_agent: User-Agent header sent with every request
            timeout: Timeout for barcode lookups in seconds
            search_timeout: Timeout for text search in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._headers = {"User-Agent": user_agent}
        self._timeout = timeout
        self._search_timeout = search_timeout

    async def _get(
        self,
        url: str,
        *,
        timeout: float,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                return await client.get(url, params=params, headers=self._headers)
        except httpx.ConnectError as e:
            logger.error(f"Open Food Facts unavailable: {e}")
            raise OpenFoodFactsUnavailable(
                f"Open Food Facts is not available at {self._base_url}"
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Open Food Facts timeout: {e}")
            raise OpenFoodFactsUnavailable("Open Food Facts request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Open Food Facts transport error: {e}")
            raise OpenFoodFactsUnavailable("Open Food Facts request failed") from e

    def _json(self, response: httpx.Response) -> Dict[str, Any]:
        """Decode a JSON object body; rate-limit pages come back as HTML."""
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Open Food Facts returned a non-JSON body: {e}")
            raise OpenFoodFactsAPIError(
                "Invalid response from Open Food Facts",
                response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise OpenFoodFactsAPIError(
                "Invalid response from Open Food Facts",
                response.status_code,
            )
        return data

    async def get_product(self, barcode: str) -> Optional[Dict[str, Any]]:
        """
        Look up a product by barcode.

        Args:
            barcode: EAN/UPC code

        Returns:
            Raw product dict, or None if the product is unknown

        Raises:
            OpenFoodFactsUnavailable: If the API is not reachable
            OpenFoodFactsAPIError: If the API returns an error response
        """
        url = f"{self._base_url}/api/v0/product/{barcode}.json"
        response = await self._get(url, timeout=self._timeout)

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            logger.error(
                f"Open Food Facts error: {response.status_code} - {response.text}"
            )
            raise OpenFoodFactsAPIError(
                f"Failed to fetch product {barcode}",
                response.status_code,
            )

        data = self._json(response)
        if data.get("status") != 1 or not data.get("product"):
            return None
        product = dict(data["product"])
        product.setdefault("code", data.get("code") or barcode)
        return product

    async def search_products(
        self,
        query: str,
        page_size: int = 12,
    ) -> List[Dict[str, Any]]:
        """
        Full-text product search.

        Args:
            query: Search terms
            page_size: Maximum products to return

        Returns:
            List of raw product dicts

        Raises:
            OpenFoodFactsUnavailable: If the API is not reachable or too slow
            OpenFoodFactsAPIError: If the API returns an error response
        """
        url = f"{self._base_url}/cgi/search.pl"
        params = {
            "search_terms": query,
            "search_simple": 1,
            "action": "process",
            "json": 1,
            "page_size": page_size,
            "fields": SEARCH_FIELDS,
        }
        response = await self._get(url, timeout=self._search_timeout, params=params)

        if response.status_code != 200:
            logger.error(
                f"Open Food Facts search error: {response.status_code} - {response.text}"
            )
            raise OpenFoodFactsAPIError("Food search failed", response.status_code)

        return self._json(response).get("products") or []
