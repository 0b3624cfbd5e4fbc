"""
Price statistics for a brand's public catalogue
"""
from collections import defaultdict
from typing import Any, Dict, List, Optional


def effective_price(product: Dict[str, Any]) -> float:
    """Sale price when set, else list price"""
    return product.get("sale_price") or product.get("price") or 0


def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0


def _empty_stats(total_products: int) -> Dict[str, Any]:
    return {
        "total_products": total_products,
        "price_range": {"min": 0, "max": 0, "average": 0},
        "category_averages": {},
        "custom_vs_ready": {"custom_avg": 0, "ready_avg": 0},
        "has_pricing_data": False,
    }


def calculate_pricing_stats(products: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Summarise prices across products.

    Only positive effective prices count. Products without any usable price
    still count toward ``total_products``.
    """
    priced = [(product, effective_price(product)) for product in products]
    priced = [(product, price) for product, price in priced if price > 0]

    if not priced:
        return _empty_stats(len(products))

    prices = sorted(price for _, price in priced)

    by_category: Dict[Optional[str], List[float]] = defaultdict(list)
    for product, price in priced:
        by_category[product.get("category")].append(price)

    custom = [price for product, price in priced if product.get("is_custom")]
    ready = [price for product, price in priced if not product.get("is_custom")]

    return {
        "total_products": len(products),
        "price_range": {"min": prices[0], "max": prices[-1], "average": _average(prices)},
        "category_averages": {category: _average(values) for category, values in by_category.items()},
        "custom_vs_ready": {"custom_avg": _average(custom), "ready_avg": _average(ready)},
        "has_pricing_data": True,
    }
