"""Price oracle protocol — raw oracle price lookups."""
from typing import Protocol, Sequence

from ..config import ContractConfig
from ..models import RawPrice


class PriceOracle(Protocol):
    """Abstract interface for querying an on-chain price oracle."""

    async def query_price(self, contract: ContractConfig, oracle_key: str) -> RawPrice: ...

    async def batch_query_prices(
        self,
        router: ContractConfig,
        oracle: ContractConfig,
        oracle_keys: Sequence[str],
    ) -> dict[str, RawPrice]: ...
