"""
Food Item Repository Interface (Port).

Local cache of normalized food products, looked up before calling the
third-party nutrition source.
"""
from typing import Protocol, Optional, List, Dict, Any


class FoodItemRepository(Protocol):
    """Persistence for normalized food items."""

    def get_by_barcode(self, barcode: str) -> Optional[Dict[str, Any]]:
        """Get a stored food item by barcode, or None."""
        ...

    def search(self, query: str, *, limit: int = 20) -> List[Dict[str, Any]]:
        """
        Case-insensitive substring search over name and brand.

        Returns:
            List of food item dicts
        """
        ...

    def insert(self, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Insert a food item. Returns the stored row, or None on failure."""
        ...

    def update(self, item_id: str, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace a stored food item. Returns the stored row, or None on failure."""
        ...
