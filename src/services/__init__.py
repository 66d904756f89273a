"""Service modules"""
from .price_service import PriceService, fetch_batch_prices, fetch_shd_price
from .watcher import PriceWatcher, format_label

__all__ = [
    "PriceService",
    "PriceWatcher",
    "fetch_batch_prices",
    "fetch_shd_price",
    "format_label",
]
