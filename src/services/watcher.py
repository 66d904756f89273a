"""Periodic price refresh loop."""
from __future__ import annotations

import asyncio
import logging

from ..config import AppConfig
from ..models import PriceResult, PriceStatus
from .price_service import PriceService

logger = logging.getLogger(__name__)


def format_label(result: PriceResult) -> str:
    """Human-readable line such as ``SHD = $1.23``."""
    if result.ok:
        return f"{result.oracle_key} = ${result.formatted}"
    if result.status is PriceStatus.KEY_MISSING:
        return f"{result.oracle_key}: price data unavailable"
    return f"{result.oracle_key}: error fetching price"


class PriceWatcher:
    """Refresh the configured token prices on a fixed interval."""

    def __init__(self, service: PriceService, config: AppConfig) -> None:
        self._service = service
        self._config = config

    async def refresh(self) -> dict[str, PriceResult]:
        results = await self._service.fetch_batch(self._config.oracle.tokens)
        if not results:
            logger.warning("Batch price query returned nothing")
        for result in results.values():
            logger.info("%s", format_label(result))
        return results

    async def run_continuous(
        self, interval_seconds: int | None = None, iterations: int | None = None
    ) -> None:
        """Run the refresh loop; ``iterations`` bounds it, None runs forever."""
        interval = (
            self._config.watch.refresh_interval_seconds
            if interval_seconds is None
            else interval_seconds
        )
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval}")
        logger.info("Starting price refresh (every %d seconds)", interval)

        completed = 0
        while iterations is None or completed < iterations:
            try:
                await self.refresh()
            except Exception as e:
                logger.error("Error in refresh loop: %s", e)
            completed += 1
            if iterations is None or completed < iterations:
                await asyncio.sleep(interval)
