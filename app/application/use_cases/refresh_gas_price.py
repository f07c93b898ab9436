from __future__ import annotations

import logging
import time
from typing import Callable

from app.application.dto.gas_price import RefreshGasPriceOutput
from app.application.ports.chain_data_port import ChainDataPort
from app.application.ports.gas_price_cache_port import GasPriceCachePort
from app.domain.entities.gas_price import GasPriceSnapshot


logger = logging.getLogger(__name__)


class RefreshGasPriceUseCase:
    """One refresh tick. Never raises; failures keep the last good snapshot."""

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

    def execute(self) -> RefreshGasPriceOutput:
        try:
            reachable = self._chain_port.is_reachable()
        except Exception as exc:  # noqa: BLE001
            logger.warning("refresh_gas_price: reachability_probe_failed detail=%s", exc)
            reachable = False
        if not reachable:
            logger.warning("refresh_gas_price: provider_unreachable skip=true")
            return RefreshGasPriceOutput(status="skipped_unreachable", snapshot=self._cache.get())

        if self._cache.is_valid(now=self._clock(), ttl_seconds=self._ttl_seconds):
            logger.debug("refresh_gas_price: cache_fresh ttl_seconds=%s", self._ttl_seconds)
            return RefreshGasPriceOutput(status="skipped_fresh", snapshot=self._cache.get())

        try:
            fee_data = self._chain_port.fetch_fee_data()
            snapshot = GasPriceSnapshot.from_fee_data(fee_data, captured_at=self._clock())
        except Exception as exc:  # noqa: BLE001
            previous = self._cache.get()
            logger.error(
                "refresh_gas_price: fetch_failed keeping_previous=%s detail=%s",
                previous is not None,
                exc,
                exc_info=True,
            )
            return RefreshGasPriceOutput(status="failed", snapshot=previous, error=str(exc))

        self._cache.set(snapshot)
        logger.debug(
            "refresh_gas_price: refreshed gas_price=%s max_fee_per_gas=%s max_priority_fee_per_gas=%s",
            snapshot.gas_price,
            snapshot.max_fee_per_gas,
            snapshot.max_priority_fee_per_gas,
        )
        return RefreshGasPriceOutput(status="refreshed", snapshot=snapshot)
