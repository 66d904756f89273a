"""Secret Network contract query client with LCD endpoint fallback."""
import asyncio
import logging
from typing import Any

from secret_sdk.client.lcd import AsyncLCDClient

from ...config import SecretConfig
from ...exceptions import OracleTransportError

logger = logging.getLogger(__name__)


class SecretClient:
    """Run encrypted smart-contract queries against Secret Network LCD nodes.

    ``AsyncLCDClient`` encrypts each query for the contract, calls the
    ``/compute`` REST route and decrypts the answer. Endpoints are tried in
    order starting from the last one that answered.
    """

    def __init__(self, config: SecretConfig) -> None:
        self.endpoints = list(config.query_endpoints)
        self.chain_id = config.chain_id
        self.timeout = config.query_timeout
        self.current_endpoint_index = 0

    async def contract_query(
        self, contract_address: str, code_hash: str, query: dict[str, Any]
    ) -> dict[str, Any]:
        """Run a read-only query against a contract and return its JSON answer."""
        if not self.endpoints:
            raise OracleTransportError("No LCD endpoints configured")

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            index = (self.current_endpoint_index + attempt) % len(self.endpoints)
            url = self.endpoints[index]

            try:
                result = await asyncio.wait_for(
                    self._query(url, contract_address, code_hash, query),
                    timeout=self.timeout,
                )
            except Exception as e:
                last_error = e
                logger.warning("LCD endpoint %s failed: %s", url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

            if index != self.current_endpoint_index:
                logger.info("Switched to LCD endpoint: %s", url)
                self.current_endpoint_index = index
            return result

        raise OracleTransportError(
            f"All LCD endpoints failed. Last error: {last_error}"
        )

    async def _query(
        self, url: str, contract_address: str, code_hash: str, query: dict[str, Any]
    ) -> dict[str, Any]:
        async with AsyncLCDClient(url=url, chain_id=self.chain_id) as lcd:
            result = await lcd.wasm.contract_query(contract_address, query, code_hash)

        if not isinstance(result, dict):
            raise OracleTransportError(
                f"Contract answered with {type(result).__name__}, expected an object"
            )
        return result
