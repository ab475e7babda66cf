"""
Nutrition Normalizer.

Maps raw Open Food Facts product records onto the per-serving
NormalizedFoodItem schema.

Each field takes the first rule that applies:
1. the explicit per-serving value
2. the per-100g value as-is, when the product declares its data per serving
3. the per-100g value scaled by serving_g / 100
Calories additionally fall back to kJ (/ 4.184) and then to a bare
"energy-kcal" value, and default to 0. Sodium falls back to salt / 2.5.

Normalization is a pure function of the input record.
"""
import math
import re
from typing import Any, Dict, Optional

from domain.models.nutrition import NormalizedFoodItem

KJ_PER_KCAL = 4.184
SALT_TO_SODIUM = 2.5
UNKNOWN_PRODUCT_NAME = "Unknown Product"
SOURCE = "openfoodfacts"

# Millilitres are taken as grams (density 1)
_SERVING_SIZE_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*(g|gr|gram|grams|ml)\b", re.IGNORECASE)

_MACRO_FIELDS = {
    "protein_g": "proteins",
    "carbs_g": "carbohydrates",
    "fat_g": "fat",
    "fiber_g": "fiber",
    "sugar_g": "sugars",
}


def _as_float(value: Any) -> Optional[float]:
    """Coerce a raw nutriment to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_serving_size_g(product: Dict[str, Any]) -> Optional[float]:
    """
    Serving size in grams.

    Prefers a positive numeric serving_quantity, then the first
    "<number> <unit>" in the serving_size text.
    """
    quantity = _as_float(product.get("serving_quantity"))
    if quantity is not None and quantity > 0:
        return quantity

    text = (product.get("serving_size") or "").strip()
    match = _SERVING_SIZE_RE.search(text)
    if not match:
        return None
    value = _as_float(match.group(1))
    if value is None or value <= 0:
        return None
    return value


def product_display_name(product: Dict[str, Any]) -> Optional[str]:
    """English name when present, else the default product name."""
    for key in ("product_name_en", "product_name"):
        name = (product.get(key) or "").strip()
        if name:
            return name
    return None


def product_brand(product: Dict[str, Any]) -> Optional[str]:
    brands = product.get("brands") or ""
    first = brands.split(",")[0].strip()
    return first or None


def _per_serving(
    per_100g: Optional[float],
    per_serving: Optional[float],
    serving_g: Optional[float],
    per_serving_basis: bool,
) -> Optional[float]:
    if per_serving is not None:
        return per_serving
    if per_serving_basis and per_100g is not None:
        return per_100g
    if per_100g is not None and serving_g is not None:
        return per_100g * serving_g / 100
    return None


def _calories(
    nutriments: Dict[str, Any],
    serving_g: Optional[float],
    per_serving_basis: bool,
) -> float:
    kcal_100g = _as_float(nutriments.get("energy-kcal_100g"))
    kcal = _per_serving(
        kcal_100g,
        _as_float(nutriments.get("energy-kcal_serving")),
        serving_g,
        per_serving_basis,
    )
    # A per-100g figure that cannot be scaled means the serving energy is unknown
    if kcal is None and kcal_100g is not None:
        return 0.0
    if kcal is None:
        kj = _per_serving(
            _as_float(nutriments.get("energy-kj_100g")),
            _as_float(nutriments.get("energy-kj_serving")),
            serving_g,
            per_serving_basis,
        )
        if kj is not None:
            kcal = kj / KJ_PER_KCAL
    if kcal is None:
        kcal = _as_float(nutriments.get("energy-kcal"))
    if kcal is None:
        return 0.0
    return max(0.0, round(kcal, 2))


def _sodium_mg(
    nutriments: Dict[str, Any],
    serving_g: Optional[float],
    per_serving_basis: bool,
) -> Optional[int]:
    sodium_serving = _as_float(nutriments.get("sodium_serving"))
    if sodium_serving is not None:
        return round(sodium_serving * 1000)
    salt_serving = _as_float(nutriments.get("salt_serving"))
    if salt_serving is not None:
        return round(salt_serving * 1000 / SALT_TO_SODIUM)

    sodium_100g = _as_float(nutriments.get("sodium_100g"))
    salt_100g = _as_float(nutriments.get("salt_100g"))
    if per_serving_basis:
        if sodium_100g is not None:
            return round(sodium_100g * 1000)
        if salt_100g is not None:
            return round(salt_100g * 1000 / SALT_TO_SODIUM)
    if serving_g is not None:
        if sodium_100g is not None:
            return round(sodium_100g * serving_g * 1000 / 100)
        if salt_100g is not None:
            return round(salt_100g * serving_g * 1000 / 100 / SALT_TO_SODIUM)
    return None


def normalize_product(
    product: Dict[str, Any],
    barcode: Optional[str] = None,
) -> NormalizedFoodItem:
    """
    Normalize a raw product record.

    Args:
        product: Raw product (the "product" object of a barcode lookup,
            or one entry of a search response)
        barcode: Barcode to use when the record has no "code"

    Returns:
        NormalizedFoodItem with calories_per_serving always >= 0
    """
    nutriments = product.get("nutriments") or {}
    per_serving_basis = str(product.get("nutrition_data_per") or "").lower() == "serving"
    serving_g = parse_serving_size_g(product)

    macros: Dict[str, Optional[float]] = {}
    for field_name, key in _MACRO_FIELDS.items():
        value = _per_serving(
            _as_float(nutriments.get(f"{key}_100g")),
            _as_float(nutriments.get(f"{key}_serving")),
            serving_g,
            per_serving_basis,
        )
        macros[field_name] = round(value, 2) if value is not None else None

    code = product.get("code") or barcode
    return NormalizedFoodItem(
        id=f"off-{code}" if code else None,
        barcode=str(code) if code else None,
        name=product_display_name(product) or UNKNOWN_PRODUCT_NAME,
        brand=product_brand(product),
        serving_size_g=serving_g,
        serving_description=(product.get("serving_size") or "").strip() or None,
        calories_per_serving=_calories(nutriments, serving_g, per_serving_basis),
        sodium_mg=_sodium_mg(nutriments, serving_g, per_serving_basis),
        source=SOURCE,
        **macros,
    )
