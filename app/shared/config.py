from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: str) -> bool:
    value = (_env(name, default) or "").strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"{name} must be a boolean, got '{value}'.")


def _positive_float(name: str, default: str) -> float:
    value = float(_env(name, default))
    if value <= 0:
        raise ValueError(f"{name} must be positive.")
    return value


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    rpc_api_key: str
    rpc_timeout_seconds: float
    gas_price_ttl_seconds: float
    gas_price_refresh_seconds: float
    gas_price_refresh_enabled: bool
    uniswap_v2_factory_address: str
    swap_fee_numerator: int
    swap_fee_denominator: int
    wrapped_native_address: str
    wrapped_native_decimals: int
    log_level: str


def get_settings() -> Settings:
    fee_numerator = int(_env("SWAP_FEE_NUMERATOR", "997"))
    fee_denominator = int(_env("SWAP_FEE_DENOMINATOR", "1000"))
    if not 0 < fee_numerator <= fee_denominator:
        raise ValueError("SWAP_FEE_NUMERATOR must be in (0, SWAP_FEE_DENOMINATOR].")
    wrapped_native_decimals = int(_env("WRAPPED_NATIVE_DECIMALS", "18"))
    if wrapped_native_decimals < 0:
        raise ValueError("WRAPPED_NATIVE_DECIMALS must be non-negative.")

    return Settings(
        rpc_url=_env("RPC_URL", "https://mainnet.infura.io/v3"),
        rpc_api_key=_env("RPC_API_KEY", ""),
        rpc_timeout_seconds=_positive_float("RPC_TIMEOUT_SECONDS", "10"),
        gas_price_ttl_seconds=_positive_float("GAS_PRICE_TTL_SECONDS", "300"),
        gas_price_refresh_seconds=_positive_float("GAS_PRICE_REFRESH_SECONDS", "10"),
        gas_price_refresh_enabled=_bool("GAS_PRICE_REFRESH_ENABLED", "true"),
        uniswap_v2_factory_address=_env(
            "UNISWAP_V2_FACTORY_ADDRESS",
            "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f",
        ),
        swap_fee_numerator=fee_numerator,
        swap_fee_denominator=fee_denominator,
        wrapped_native_address=_env(
            "WRAPPED_NATIVE_ADDRESS",
            "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        ),
        wrapped_native_decimals=wrapped_native_decimals,
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
