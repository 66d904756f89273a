"""Shared test fixtures and sample data."""
from __future__ import annotations

import base64
import json
import textwrap
from pathlib import Path
from typing import Any

import pytest

from src.config import (
    AppConfig,
    ContractConfig,
    OracleConfig,
    SecretConfig,
    WatchConfig,
)
from src.models import RawPrice

ORACLE_ADDRESS = "secret10n2xl5jmez6r9umtdrth78k0vwmce0l5m9f5dm"
ORACLE_HASH = "32c4710842b97a526c243a68511b15f58d6e72a388af38a7221ff3244c754e91"
ROUTER_ADDRESS = "secret15mkmad8ac036v4nrpcc7nk8wyr578egt077syt"
ROUTER_HASH = "1c7e86ba4fdb6760e70bf08a7df7f44b53eb0b23290e3e69ca96140810d4f432"


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def oracle_contract() -> ContractConfig:
    return ContractConfig(address=ORACLE_ADDRESS, code_hash=ORACLE_HASH)


@pytest.fixture()
def router_contract() -> ContractConfig:
    return ContractConfig(address=ROUTER_ADDRESS, code_hash=ROUTER_HASH)


@pytest.fixture()
def sample_secret_config() -> SecretConfig:
    return SecretConfig(
        query_endpoints=("https://gw1.example.com", "https://gw2.example.com"),
        query_timeout=10,
    )


@pytest.fixture()
def sample_oracle_config(
    oracle_contract: ContractConfig, router_contract: ContractConfig
) -> OracleConfig:
    return OracleConfig(
        contract=oracle_contract,
        query_router=router_contract,
        tokens=("SHD", "BTC", "ETH"),
    )


@pytest.fixture()
def sample_app_config(
    sample_secret_config: SecretConfig, sample_oracle_config: OracleConfig
) -> AppConfig:
    return AppConfig(
        secret=sample_secret_config,
        oracle=sample_oracle_config,
        watch=WatchConfig(refresh_interval_seconds=5),
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent(f"""\
    secret:
      query_endpoints: ["https://gw.example.com"]
      query_timeout: 10
    oracle:
      contract:
        address: {ORACLE_ADDRESS}
        code_hash: {ORACLE_HASH}
      query_router:
        address: {ROUTER_ADDRESS}
        code_hash: {ROUTER_HASH}
      tokens: [SHD, BTC]
    watch:
      refresh_interval_seconds: 30
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample oracle data
# ---------------------------------------------------------------------------


def b64_json(value: Any) -> str:
    return base64.b64encode(json.dumps(value).encode()).decode()


def price_answer(key: str, rate: str) -> dict[str, Any]:
    """Oracle ``get_price`` answer."""
    return {
        "key": key,
        "data": {
            "rate": rate,
            "last_updated_base": 1700000000,
            "last_updated_quote": 1700000001,
        },
    }


def batch_answer(prices: dict[str, str], failed: tuple[str, ...] = ()) -> dict[str, Any]:
    """Query router ``batch`` answer; ``failed`` keys come back as system errors."""
    responses: list[dict[str, Any]] = [
        {"id": b64_json(key), "response": {"response": b64_json(price_answer(key, rate))}}
        for key, rate in prices.items()
    ]
    responses.extend(
        {"id": b64_json(key), "response": {"system_err": "unknown key"}}
        for key in failed
    )
    return {"batch": {"block_height": 123, "responses": responses}}


@pytest.fixture()
def shd_raw_price() -> RawPrice:
    return RawPrice(oracle_key="SHD", rate="1230000000000000000")


@pytest.fixture()
def make_price_answer():
    return price_answer


@pytest.fixture()
def make_batch_answer():
    return batch_answer


@pytest.fixture()
def encode_b64_json():
    return b64_json
