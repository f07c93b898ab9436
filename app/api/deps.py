from __future__ import annotations

from functools import lru_cache

from app.application.dto.swap_quote import SwapQuoterSettings
from app.application.use_cases.get_gas_price import GetGasPriceUseCase
from app.application.use_cases.get_service_health import GetServiceHealthUseCase
from app.application.use_cases.quote_swap import QuoteSwapUseCase
from app.application.use_cases.refresh_gas_price import RefreshGasPriceUseCase
from app.infrastructure.cache.gas_price_cache import InMemoryGasPriceCache
from app.infrastructure.clients.web3_chain_client import (
    Web3ChainClient,
    Web3ChainClientSettings,
)
from app.infrastructure.scheduler.gas_price_refresh_scheduler import GasPriceRefreshScheduler
from app.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_chain_client() -> Web3ChainClient:
    settings = get_settings()
    return Web3ChainClient(
        Web3ChainClientSettings(
            rpc_url=settings.rpc_url,
            api_key=settings.rpc_api_key,
            timeout_seconds=settings.rpc_timeout_seconds,
        )
    )


@lru_cache(maxsize=1)
def _get_gas_price_cache() -> InMemoryGasPriceCache:
    return InMemoryGasPriceCache()


def get_gas_price_use_case() -> GetGasPriceUseCase:
    settings = get_settings()
    return GetGasPriceUseCase(
        chain_port=_get_chain_client(),
        cache=_get_gas_price_cache(),
        ttl_seconds=settings.gas_price_ttl_seconds,
    )


def get_refresh_gas_price_use_case() -> RefreshGasPriceUseCase:
    settings = get_settings()
    return RefreshGasPriceUseCase(
        chain_port=_get_chain_client(),
        cache=_get_gas_price_cache(),
        ttl_seconds=settings.gas_price_ttl_seconds,
    )


def get_service_health_use_case() -> GetServiceHealthUseCase:
    settings = get_settings()
    return GetServiceHealthUseCase(
        chain_port=_get_chain_client(),
        cache=_get_gas_price_cache(),
        ttl_seconds=settings.gas_price_ttl_seconds,
    )


def get_quote_swap_use_case() -> QuoteSwapUseCase:
    settings = get_settings()
    return QuoteSwapUseCase(
        chain_port=_get_chain_client(),
        settings=SwapQuoterSettings(
            factory_address=settings.uniswap_v2_factory_address,
            wrapped_native_address=settings.wrapped_native_address,
            wrapped_native_decimals=settings.wrapped_native_decimals,
            fee_numerator=settings.swap_fee_numerator,
            fee_denominator=settings.swap_fee_denominator,
        ),
    )


def build_gas_price_refresh_scheduler() -> GasPriceRefreshScheduler:
    settings = get_settings()
    return GasPriceRefreshScheduler(
        refresh_use_case=get_refresh_gas_price_use_case(),
        period_seconds=settings.gas_price_refresh_seconds,
    )
