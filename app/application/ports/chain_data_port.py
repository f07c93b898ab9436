from __future__ import annotations

from typing import Any, Protocol, Sequence

from app.domain.entities.gas_price import FeeData


class ChainDataPort(Protocol):
    def fetch_fee_data(self) -> FeeData:
        ...

    def read_contract(
        self,
        address: str,
        method_signature: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """Run a read-only call.

        `method_signature` uses the `name(inputTypes)(outputTypes)` form, e.g.
        `getPair(address,address)(address)`. A single output is returned as-is,
        several outputs as a tuple.
        """
        ...

    def is_reachable(self) -> bool:
        ...
