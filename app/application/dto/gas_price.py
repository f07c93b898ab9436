from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from app.domain.entities.gas_price import GasPriceSnapshot


RefreshStatus = Literal["refreshed", "skipped_unreachable", "skipped_fresh", "failed"]


@dataclass(frozen=True)
class RefreshGasPriceOutput:
    status: RefreshStatus
    snapshot: GasPriceSnapshot | None
    error: str | None = None


@dataclass(frozen=True)
class GetGasPriceOutput:
    snapshot: GasPriceSnapshot
    is_fresh: bool
    age_seconds: float


@dataclass(frozen=True)
class GasPriceHealthOutput:
    chain_reachable: bool
    gas_price_cached: bool
    gas_price_fresh: bool
    gas_price_age_seconds: float | None
