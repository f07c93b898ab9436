from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from app.domain.services.address import same_address


@dataclass(frozen=True)
class PairReserves:
    pair_address: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int

    def reserves_for(self, from_token: str) -> tuple[int, int]:
        if same_address(self.token0, from_token):
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0


@dataclass(frozen=True)
class ReserveState:
    pair_address: str
    reserve_in: int
    reserve_out: int
    decimals_in: int
    decimals_out: int


@dataclass(frozen=True)
class QuoteResult:
    from_token: str
    to_token: str
    amount_in: Decimal
    amount_out: Decimal
    price_impact_pct: Decimal
    timestamp: float
