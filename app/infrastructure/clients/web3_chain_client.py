from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Any, Sequence

from eth_abi import decode, encode
from web3 import Web3

from app.domain.entities.gas_price import FeeData
from app.domain.exceptions import ChainUnreachableError, RpcCallFailedError
from app.domain.services.address import to_checksum


logger = logging.getLogger(__name__)

DEFAULT_PRIORITY_FEE_WEI = 1_000_000_000

_SIGNATURE_PATTERN = re.compile(r"^(?P<name>\w+)\((?P<inputs>[^()]*)\)(?:\((?P<outputs>[^()]*)\))?$")


@dataclass(frozen=True)
class MethodSignature:
    name: str
    input_types: tuple[str, ...]
    output_types: tuple[str, ...]

    @property
    def selector(self) -> bytes:
        return bytes(Web3.keccak(text=f"{self.name}({','.join(self.input_types)})")[:4])


def parse_method_signature(signature: str) -> MethodSignature:
    match = _SIGNATURE_PATTERN.match(signature.replace(" ", ""))
    if match is None:
        raise ValueError(f"Unsupported method signature: {signature}")
    return MethodSignature(
        name=match.group("name"),
        input_types=_split_types(match.group("inputs")),
        output_types=_split_types(match.group("outputs") or ""),
    )


def _split_types(raw: str) -> tuple[str, ...]:
    return tuple(part for part in raw.split(",") if part)


@dataclass(frozen=True)
class Web3ChainClientSettings:
    rpc_url: str
    api_key: str
    timeout_seconds: float


class Web3ChainClient:
    def __init__(self, settings: Web3ChainClientSettings, *, web3: Web3 | None = None):
        self._settings = settings
        self._w3 = web3 or Web3(
            Web3.HTTPProvider(
                self._build_rpc_url(),
                request_kwargs={"timeout": settings.timeout_seconds},
            )
        )

    def _build_rpc_url(self) -> str:
        base = self._settings.rpc_url.rstrip("/")
        if not self._settings.api_key:
            return base
        return f"{base}/{self._settings.api_key}"

    def is_reachable(self) -> bool:
        try:
            self._w3.eth.chain_id
        except Exception as exc:  # noqa: BLE001
            logger.debug("web3_chain_client: probe_failed detail=%s", exc)
            return False
        return True

    def fetch_fee_data(self) -> FeeData:
        try:
            gas_price = int(self._w3.eth.gas_price)
            block = self._w3.eth.get_block("latest")
            base_fee = block.get("baseFeePerGas")
            if base_fee is None:
                return FeeData(gas_price=gas_price, max_fee_per_gas=None, max_priority_fee_per_gas=None)
            priority_fee = self._max_priority_fee()
        except Exception as exc:
            raise self._wrap_error(exc, "fetch_fee_data") from exc

        return FeeData(
            gas_price=gas_price,
            max_fee_per_gas=int(base_fee) * 2 + priority_fee,
            max_priority_fee_per_gas=priority_fee,
        )

    def _max_priority_fee(self) -> int:
        try:
            return int(self._w3.eth.max_priority_fee)
        except Exception as exc:  # noqa: BLE001
            if isinstance(exc, OSError):
                raise
            logger.info(
                "web3_chain_client: max_priority_fee_unsupported fallback_wei=%s detail=%s",
                DEFAULT_PRIORITY_FEE_WEI,
                exc,
            )
            return DEFAULT_PRIORITY_FEE_WEI

    def read_contract(
        self,
        address: str,
        method_signature: str,
        args: Sequence[Any] = (),
    ) -> Any:
        signature = parse_method_signature(method_signature)
        if len(args) != len(signature.input_types):
            raise ValueError(
                f"{signature.name} expects {len(signature.input_types)} args, got {len(args)}."
            )

        values = [
            to_checksum(value) if abi_type == "address" else value
            for abi_type, value in zip(signature.input_types, args)
        ]
        data = signature.selector + encode(list(signature.input_types), values)
        try:
            raw = self._w3.eth.call({"to": to_checksum(address), "data": Web3.to_hex(data)})
            decoded = decode(list(signature.output_types), bytes(raw))
        except Exception as exc:
            raise self._wrap_error(exc, f"{signature.name}@{address}") from exc

        if len(decoded) == 1:
            return decoded[0]
        return tuple(decoded)

    @staticmethod
    def _wrap_error(exc: Exception, operation: str) -> Exception:
        logger.warning("web3_chain_client: call_failed operation=%s detail=%s", operation, exc)
        # requests' transport errors derive from OSError
        if isinstance(exc, OSError):
            return ChainUnreachableError(f"RPC provider unreachable during {operation}.")
        return RpcCallFailedError(f"RPC call failed: {operation}.")
