"""Shade Protocol oracle client — single and router-batched price queries."""
from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Sequence

from ..config import ContractConfig
from ..exceptions import OracleDecodeError
from ..interfaces.chain import ContractQueryClient
from ..models import RawPrice

logger = logging.getLogger(__name__)


def _encode_b64_json(value: Any) -> str:
    return base64.b64encode(json.dumps(value).encode()).decode()


def _decode_b64_json(value: str) -> Any:
    try:
        return json.loads(base64.b64decode(value, validate=True))
    except (binascii.Error, ValueError, TypeError) as e:
        raise OracleDecodeError(f"Invalid base64 JSON payload: {e}") from e


def price_query_msg(oracle_key: str) -> dict[str, Any]:
    """Query message understood by the oracle contract."""
    return {"get_price": {"key": oracle_key}}


def parse_price(response: Any, oracle_key: str | None = None) -> RawPrice:
    """Parse a ``get_price`` answer: ``{"key": .., "data": {"rate": ..}}``."""
    if not isinstance(response, dict):
        raise OracleDecodeError("Price response is not an object")
    data = response.get("data")
    if not isinstance(data, dict) or "rate" not in data:
        raise OracleDecodeError("Price response has no rate")

    key = oracle_key or response.get("key")
    if not key:
        raise OracleDecodeError("Price response has no key")

    return RawPrice(
        oracle_key=str(key),
        rate=str(data["rate"]),
        last_updated_base=_optional_int(data.get("last_updated_base")),
        last_updated_quote=_optional_int(data.get("last_updated_quote")),
    )


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ShadeOracle:
    """Query prices from the Shade oracle, directly or through the query router."""

    def __init__(self, client: ContractQueryClient) -> None:
        self._client = client

    async def query_price(self, contract: ContractConfig, oracle_key: str) -> RawPrice:
        response = await self._client.contract_query(
            contract.address, contract.code_hash, price_query_msg(oracle_key)
        )
        return parse_price(response, oracle_key)

    async def batch_query_prices(
        self,
        router: ContractConfig,
        oracle: ContractConfig,
        oracle_keys: Sequence[str],
    ) -> dict[str, RawPrice]:
        """Fetch several prices with one router query.

        Keys the router could not resolve are left out of the result.
        """
        queries = [
            {
                "id": _encode_b64_json(key),
                "contract": {"address": oracle.address, "code_hash": oracle.code_hash},
                "query": _encode_b64_json(price_query_msg(key)),
            }
            for key in oracle_keys
        ]
        response = await self._client.contract_query(
            router.address, router.code_hash, {"batch": {"queries": queries}}
        )

        batch = response.get("batch") if isinstance(response, dict) else None
        if not isinstance(batch, dict) or not isinstance(batch.get("responses"), list):
            raise OracleDecodeError("Batch response has no responses list")

        prices: dict[str, RawPrice] = {}
        for item in batch["responses"]:
            if not isinstance(item, dict):
                raise OracleDecodeError("Batch response entry is not an object")
            key = _decode_b64_json(item.get("id", ""))
            if not isinstance(key, str):
                raise OracleDecodeError(f"Batch response id is not a key: {key!r}")
            inner = item.get("response") or {}
            if "system_err" in inner:
                logger.debug("Router could not query %s: %s", key, inner["system_err"])
                continue
            if "response" not in inner:
                continue
            try:
                prices[key] = parse_price(_decode_b64_json(inner["response"]), key)
            except OracleDecodeError as e:
                logger.debug("Skipping undecodable price for %s: %s", key, e)

        return prices
