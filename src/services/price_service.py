"""Price facade — single and batch oracle lookups rendered for display."""
from __future__ import annotations

import logging
from typing import Iterable

from ..chains.secret import SecretClient
from ..config import AppConfig, ContractConfig, OracleConfig
from ..exceptions import OracleError
from ..interfaces.price_oracle import PriceOracle
from ..models import PriceQuery, PriceResult, PriceStatus, RawPrice
from ..oracles import ShadeOracle
from ..pricing import format_price, scale_rate

logger = logging.getLogger(__name__)


class PriceService:
    """Fetch oracle rates and turn them into display prices.

    Every failure below this layer is converted into a :class:`PriceResult`
    carrying a status; nothing from the oracle client escapes to callers.
    """

    def __init__(self, oracle: PriceOracle, config: OracleConfig) -> None:
        self._oracle = oracle
        self._config = config

    @classmethod
    def from_config(cls, config: AppConfig) -> PriceService:
        """Wire the Secret gateway client and Shade oracle from ``config``."""
        return cls(ShadeOracle(SecretClient(config.secret)), config.oracle)

    # ------------------------------------------------------------------
    # Conversion helpers
    # ------------------------------------------------------------------

    def _to_result(self, raw: RawPrice, oracle_key: str) -> PriceResult:
        try:
            price = scale_rate(raw.rate, self._config.rate_decimals)
        except OracleError as e:
            logger.error("Invalid rate for %s: %s", oracle_key, e)
            return PriceResult(oracle_key, PriceStatus.TRANSPORT_ERROR, error=str(e))

        formatted = format_price(price, self._config.display_decimals)
        logger.info("Formatted %s price: %s", oracle_key, formatted)
        return PriceResult(oracle_key, PriceStatus.OK, price=price, formatted=formatted)

    @staticmethod
    def _key(query: PriceQuery | str) -> str:
        return query.oracle_key if isinstance(query, PriceQuery) else query

    @classmethod
    def _unique(cls, queries: Iterable[PriceQuery | str]) -> list[str]:
        return list(dict.fromkeys(cls._key(q) for q in queries))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def fetch_single(
        self,
        oracle_key: PriceQuery | str | None = None,
        contract: ContractConfig | None = None,
    ) -> PriceResult:
        """Fetch one price straight from the oracle contract.

        Args:
            oracle_key: Symbol or query to fetch. Defaults to the first configured token.
            contract: Oracle contract identity. Defaults to the configured oracle.
        """
        key = self._config.tokens[0] if oracle_key is None else self._key(oracle_key)
        if contract is None:
            contract = self._config.contract

        try:
            raw = await self._oracle.query_price(contract, key)
        except Exception as e:
            logger.error("Error fetching %s price: %s", key, e)
            return PriceResult(key, PriceStatus.TRANSPORT_ERROR, error=str(e))

        return self._to_result(raw, key)

    async def fetch_batch(
        self,
        oracle_keys: Iterable[PriceQuery | str] | None = None,
        router: ContractConfig | None = None,
        oracle: ContractConfig | None = None,
    ) -> dict[str, PriceResult]:
        """Fetch several prices in one router query.

        Returns one entry per requested key, in request order. Keys the
        router did not answer get a ``KEY_MISSING`` result. If the batch
        call itself fails the result is an empty dict.
        """
        keys = self._unique(oracle_keys if oracle_keys is not None else self._config.tokens)
        if not keys:
            return {}

        if router is None:
            router = self._config.query_router
        if oracle is None:
            oracle = self._config.contract

        try:
            raw_prices = await self._oracle.batch_query_prices(router, oracle, keys)
        except Exception as e:
            logger.error("Error fetching batch prices: %s", e)
            return {}

        results: dict[str, PriceResult] = {}
        for key in keys:
            raw = raw_prices.get(key)
            if raw is None:
                logger.warning("No price data found for %s", key)
                results[key] = PriceResult(
                    key, PriceStatus.KEY_MISSING, error="not returned by oracle"
                )
            else:
                results[key] = self._to_result(raw, key)
        return results

    # ------------------------------------------------------------------
    # Display-shaped lookups
    # ------------------------------------------------------------------

    async def fetch_single_display(
        self,
        oracle_key: PriceQuery | str | None = None,
        contract: ContractConfig | None = None,
    ) -> str | None:
        """Formatted price, or None when it could not be fetched."""
        result = await self.fetch_single(oracle_key, contract)
        return result.formatted if result.ok else None

    async def fetch_batch_display(
        self,
        oracle_keys: Iterable[PriceQuery | str] | None = None,
        router: ContractConfig | None = None,
        oracle: ContractConfig | None = None,
    ) -> dict[str, str]:
        """Map of key to formatted price or ``"Error"``; empty if the call failed."""
        results = await self.fetch_batch(oracle_keys, router, oracle)
        return {key: result.display for key, result in results.items()}


async def fetch_shd_price(config: AppConfig) -> str | None:
    """Formatted SHD price from the configured oracle."""
    return await PriceService.from_config(config).fetch_single_display("SHD")


async def fetch_batch_prices(config: AppConfig) -> dict[str, str]:
    """Formatted prices for every configured token."""
    return await PriceService.from_config(config).fetch_batch_display()
