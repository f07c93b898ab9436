from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GasPriceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gas_price: str = Field(..., alias="gasPrice", description="Legacy gas price in wei.")
    max_fee_per_gas: str = Field(
        ...,
        alias="maxFeePerGas",
        description="Maximum fee per gas in wei (EIP-1559).",
    )
    max_priority_fee_per_gas: str = Field(
        ...,
        alias="maxPriorityFeePerGas",
        description="Maximum priority fee per gas in wei (EIP-1559).",
    )
    timestamp: int = Field(..., description="Capture time in epoch milliseconds.")


class HealthResponse(BaseModel):
    chain_reachable: bool
    gas_price_cached: bool
    gas_price_fresh: bool
    gas_price_age_seconds: float | None = None
