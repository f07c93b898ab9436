from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class QuoteSwapInput:
    from_token: str
    to_token: str
    amount_in: str | Decimal


@dataclass(frozen=True)
class SwapQuoterSettings:
    factory_address: str
    wrapped_native_address: str
    wrapped_native_decimals: int = 18
    fee_numerator: int = 997
    fee_denominator: int = 1000
