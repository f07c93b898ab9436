from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SwapQuoteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_token_address: str = Field(..., alias="fromTokenAddress")
    to_token_address: str = Field(..., alias="toTokenAddress")
    amount_in: str = Field(..., alias="amountIn", description="Input amount, human-readable.")
    amount_out: str = Field(..., alias="amountOut", description="Output amount, human-readable.")
    price_impact: str = Field(..., alias="priceImpact", description="Price impact in percent.")
    timestamp: int = Field(..., description="Quote time in epoch milliseconds.")
