"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Shade Protocol mainnet deployments.
SHADE_ORACLE_ADDRESS = "secret10n2xl5jmez6r9umtdrth78k0vwmce0l5m9f5dm"
SHADE_ORACLE_CODE_HASH = (
    "32c4710842b97a526c243a68511b15f58d6e72a388af38a7221ff3244c754e91"
)
SHADE_ROUTER_ADDRESS = "secret15mkmad8ac036v4nrpcc7nk8wyr578egt077syt"
SHADE_ROUTER_CODE_HASH = (
    "1c7e86ba4fdb6760e70bf08a7df7f44b53eb0b23290e3e69ca96140810d4f432"
)
DEFAULT_TOKENS = ("SHD", "BTC", "ETH", "SCRT", "STKD-SCRT", "SILK")

SECRET_CHAIN_ID = "secret-4"
DEFAULT_LCD_ENDPOINTS = (
    "https://lcd.mainnet.secretsaturn.net",
    "https://rest.lavenderfive.com:443/secretnetwork",
)

_CODE_HASH_RE = re.compile(r"^[0-9a-fA-F]{64}$")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContractConfig:
    """Identity of a deployed contract: address plus code hash."""

    address: str = ""
    code_hash: str = ""


@dataclass(frozen=True)
class SecretConfig:
    query_endpoints: tuple[str, ...] = DEFAULT_LCD_ENDPOINTS
    chain_id: str = SECRET_CHAIN_ID
    query_timeout: int = 30


@dataclass(frozen=True)
class OracleConfig:
    contract: ContractConfig = field(
        default_factory=lambda: ContractConfig(
            SHADE_ORACLE_ADDRESS, SHADE_ORACLE_CODE_HASH
        )
    )
    query_router: ContractConfig = field(
        default_factory=lambda: ContractConfig(
            SHADE_ROUTER_ADDRESS, SHADE_ROUTER_CODE_HASH
        )
    )
    tokens: tuple[str, ...] = DEFAULT_TOKENS
    rate_decimals: int = 18
    display_decimals: int = 2


@dataclass(frozen=True)
class WatchConfig:
    refresh_interval_seconds: int = 60


@dataclass(frozen=True)
class AppConfig:
    secret: SecretConfig = field(default_factory=SecretConfig)
    oracle: OracleConfig = field(default_factory=OracleConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_contract(raw: dict[str, Any] | None, default: ContractConfig) -> ContractConfig:
    if not raw:
        return default
    return ContractConfig(
        address=str(raw.get("address", default.address)).strip(),
        code_hash=str(raw.get("code_hash", default.code_hash)).strip(),
    )


def _build_secret(raw: dict[str, Any]) -> SecretConfig:
    endpoints = raw.get("query_endpoints", list(DEFAULT_LCD_ENDPOINTS)) or []
    if isinstance(endpoints, str):
        endpoints = [endpoints]
    return SecretConfig(
        # an env var that is not set interpolates to "", drop those
        query_endpoints=tuple(e for e in endpoints if e),
        chain_id=str(raw.get("chain_id", SECRET_CHAIN_ID)).strip(),
        query_timeout=int(raw.get("query_timeout", 30)),
    )


def _build_oracle(raw: dict[str, Any]) -> OracleConfig:
    defaults = OracleConfig()
    tokens = raw.get("tokens")
    return OracleConfig(
        contract=_build_contract(raw.get("contract"), defaults.contract),
        query_router=_build_contract(raw.get("query_router"), defaults.query_router),
        tokens=tuple(str(t).strip() for t in tokens) if tokens is not None else DEFAULT_TOKENS,
        rate_decimals=int(raw.get("rate_decimals", 18)),
        display_decimals=int(raw.get("display_decimals", 2)),
    )


def _build_watch(raw: dict[str, Any]) -> WatchConfig:
    return WatchConfig(
        refresh_interval_seconds=int(raw.get("refresh_interval_seconds", 60)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        secret=_build_secret(raw.get("secret") or {}),
        oracle=_build_oracle(raw.get("oracle") or {}),
        watch=_build_watch(raw.get("watch") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate_contract(name: str, contract: ContractConfig) -> None:
    if not contract.address:
        raise ValueError(f"Contract '{name}' has no address")
    if not _CODE_HASH_RE.match(contract.code_hash):
        raise ValueError(
            f"Contract '{name}' code hash must be 64 hex characters"
        )


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.secret.query_endpoints:
        raise ValueError("At least one query endpoint must be configured")
    if not cfg.secret.chain_id:
        raise ValueError("Secret chain_id must not be empty")
    if cfg.secret.query_timeout <= 0:
        raise ValueError("Query timeout must be positive")

    _validate_contract("oracle", cfg.oracle.contract)
    _validate_contract("query_router", cfg.oracle.query_router)

    if not cfg.oracle.tokens:
        raise ValueError("At least one oracle token must be configured")
    seen: set[str] = set()
    for token in cfg.oracle.tokens:
        if not token:
            raise ValueError("Oracle token keys must not be empty")
        if token in seen:
            raise ValueError(f"Duplicate oracle token '{token}'")
        seen.add(token)

    if cfg.oracle.rate_decimals < 0 or cfg.oracle.display_decimals < 0:
        raise ValueError("Decimal settings must not be negative")
    if cfg.watch.refresh_interval_seconds <= 0:
        raise ValueError("Refresh interval must be positive")
