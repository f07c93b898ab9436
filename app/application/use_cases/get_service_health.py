from __future__ import annotations

import time
from typing import Callable

from app.application.dto.gas_price import GasPriceHealthOutput
from app.application.ports.chain_data_port import ChainDataPort
from app.application.ports.gas_price_cache_port import GasPriceCachePort


class GetServiceHealthUseCase:
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

    def execute(self) -> GasPriceHealthOutput:
        now = self._clock()
        snapshot = self._cache.get()
        return GasPriceHealthOutput(
            chain_reachable=self._chain_port.is_reachable(),
            gas_price_cached=snapshot is not None,
            gas_price_fresh=self._cache.is_valid(now=now, ttl_seconds=self._ttl_seconds),
            gas_price_age_seconds=snapshot.age_seconds(now) if snapshot is not None else None,
        )
