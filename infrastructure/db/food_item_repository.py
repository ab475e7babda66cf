"""
Supabase Food Item Repository Implementation.
"""
from typing import Optional, List, Dict, Any
import logging

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseFoodItemRepository:
    """Supabase implementation of FoodItemRepository over the food_items table."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_by_barcode(self, barcode: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("food_items") \
                .select("*") \
                .eq("barcode", barcode) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error fetching food item {barcode}: {e}")
            return None

    def search(self, query: str, *, limit: int = 20) -> List[Dict[str, Any]]:
        # PostgREST or-filters use commas and parentheses as separators
        term = query.replace(",", " ").replace("(", " ").replace(")", " ").strip()
        if not term:
            return []
        try:
            result = self._client.table("food_items") \
                .select("*") \
                .or_(f"name.ilike.%{term}%,brand.ilike.%{term}%") \
                .limit(limit) \
                .execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error searching food items: {e}")
            return []

    def insert(self, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("food_items").insert(record).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error inserting food item: {e}")
            return None

    def update(self, item_id: str, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table("food_items") \
                .update(record) \
                .eq("id", item_id) \
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.exception(f"Error updating food item {item_id}: {e}")
            return None
