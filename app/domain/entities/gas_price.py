from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeeData:
    gas_price: int | None
    max_fee_per_gas: int | None
    max_priority_fee_per_gas: int | None


@dataclass(frozen=True)
class GasPriceSnapshot:
    gas_price: int
    max_fee_per_gas: int
    max_priority_fee_per_gas: int
    captured_at: float

    @classmethod
    def from_fee_data(cls, fee_data: FeeData, *, captured_at: float) -> "GasPriceSnapshot":
        return cls(
            gas_price=_fee_or_zero(fee_data.gas_price),
            max_fee_per_gas=_fee_or_zero(fee_data.max_fee_per_gas),
            max_priority_fee_per_gas=_fee_or_zero(fee_data.max_priority_fee_per_gas),
            captured_at=captured_at,
        )

    def age_seconds(self, now: float) -> float:
        return max(now - self.captured_at, 0.0)


def _fee_or_zero(value: int | None) -> int:
    if value is None:
        return 0
    fee = int(value)
    if fee < 0:
        raise ValueError("fee values must be non-negative.")
    return fee
