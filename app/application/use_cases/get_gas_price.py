from __future__ import annotations

import logging
import time
from typing import Callable

from app.application.dto.gas_price import GetGasPriceOutput
from app.application.ports.chain_data_port import ChainDataPort
from app.application.ports.gas_price_cache_port import GasPriceCachePort
from app.domain.entities.gas_price import GasPriceSnapshot
from app.domain.exceptions import DomainError, RpcCallFailedError


logger = logging.getLogger(__name__)


class GetGasPriceUseCase:
    """Serves the cached snapshot, stale or not; fetches only when nothing was ever cached."""

    def __init__(
        self,
        *,
        chain_port: ChainDataPort,
        cache: GasPriceCachePort,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self._chain_port = chain_port
        self._cache = cache
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def execute(self) -> GetGasPriceOutput:
        snapshot = self._cache.get()
        if snapshot is None:
            snapshot = self._fetch_on_demand()

        now = self._clock()
        is_fresh = self._cache.is_valid(now=now, ttl_seconds=self._ttl_seconds)
        age = snapshot.age_seconds(now)
        if not is_fresh:
            logger.warning(
                "get_gas_price: serving_stale_snapshot age_seconds=%.1f ttl_seconds=%s",
                age,
                self._ttl_seconds,
            )
        return GetGasPriceOutput(snapshot=snapshot, is_fresh=is_fresh, age_seconds=age)

    def _fetch_on_demand(self) -> GasPriceSnapshot:
        logger.info("get_gas_price: cache_miss fetching_on_demand=true")
        try:
            fee_data = self._chain_port.fetch_fee_data()
            snapshot = GasPriceSnapshot.from_fee_data(fee_data, captured_at=self._clock())
        except Exception as exc:
            # The refresher may have filled the slot while this fetch was in flight.
            raced = self._cache.get()
            if raced is not None:
                logger.warning("get_gas_price: on_demand_fetch_failed using_cached=true detail=%s", exc)
                return raced
            logger.error("get_gas_price: on_demand_fetch_failed detail=%s", exc, exc_info=True)
            if isinstance(exc, DomainError):
                raise
            raise RpcCallFailedError("Failed to fetch fee data.") from exc

        self._cache.set(snapshot)
        return snapshot
