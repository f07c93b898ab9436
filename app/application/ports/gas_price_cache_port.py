from __future__ import annotations

from typing import Protocol

from app.domain.entities.gas_price import GasPriceSnapshot


class GasPriceCachePort(Protocol):
    def get(self) -> GasPriceSnapshot | None:
        ...

    def set(self, snapshot: GasPriceSnapshot) -> None:
        ...

    def is_valid(self, *, now: float, ttl_seconds: float) -> bool:
        ...
