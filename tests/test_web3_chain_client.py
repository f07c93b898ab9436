from __future__ import annotations

from eth_abi import encode
import pytest

from app.domain.exceptions import ChainUnreachableError, RpcCallFailedError
from app.infrastructure.clients.web3_chain_client import (
    DEFAULT_PRIORITY_FEE_WEI,
    Web3ChainClient,
    Web3ChainClientSettings,
    parse_method_signature,
)


FACTORY = "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
PAIR = "0xa478c2975ab1ea89e8196811f51a7b7ade33eb11"


class FakeEth:
    def __init__(
        self,
        *,
        gas_price: int = 30_000_000_000,
        block: dict | None = None,
        max_priority_fee: int | Exception = 2_000_000_000,
        call_result: bytes = b"",
        error: Exception | None = None,
    ):
        self._gas_price = gas_price
        self._block = block if block is not None else {"number": 1, "baseFeePerGas": 20_000_000_000}
        self._max_priority_fee = max_priority_fee
        self._call_result = call_result
        self._error = error
        self.calls: list[dict] = []

    @property
    def chain_id(self) -> int:
        if self._error is not None:
            raise self._error
        return 1

    @property
    def gas_price(self) -> int:
        if self._error is not None:
            raise self._error
        return self._gas_price

    @property
    def max_priority_fee(self) -> int:
        if isinstance(self._max_priority_fee, Exception):
            raise self._max_priority_fee
        return self._max_priority_fee

    def get_block(self, identifier):
        assert identifier == "latest"
        return self._block

    def call(self, tx: dict) -> bytes:
        self.calls.append(tx)
        if self._error is not None:
            raise self._error
        return self._call_result


class FakeWeb3:
    def __init__(self, eth: FakeEth):
        self.eth = eth


def _client(eth: FakeEth, *, api_key: str = "") -> Web3ChainClient:
    return Web3ChainClient(
        Web3ChainClientSettings(rpc_url="https://mainnet.infura.io/v3/", api_key=api_key, timeout_seconds=5),
        web3=FakeWeb3(eth),
    )


class TestParseMethodSignature:
    def test_parses_inputs_and_outputs(self):
        signature = parse_method_signature("getPair(address,address)(address)")
        assert signature.name == "getPair"
        assert signature.input_types == ("address", "address")
        assert signature.output_types == ("address",)

    def test_parses_empty_inputs_and_ignores_spaces(self):
        signature = parse_method_signature("getReserves() (uint112, uint112, uint32)")
        assert signature.input_types == ()
        assert signature.output_types == ("uint112", "uint112", "uint32")

    @pytest.mark.parametrize(
        ("raw", "selector"),
        [
            ("getPair(address,address)(address)", "e6a43905"),
            ("getReserves()(uint112,uint112,uint32)", "0902f1ac"),
            ("decimals()(uint8)", "313ce567"),
            ("token0()(address)", "0dfe1681"),
        ],
    )
    def test_selectors_match_known_abi(self, raw, selector):
        assert parse_method_signature(raw).selector.hex() == selector

    def test_rejects_malformed_signature(self):
        with pytest.raises(ValueError):
            parse_method_signature("function getPair")


class TestFetchFeeData:
    def test_eip1559_chain(self):
        fee = _client(FakeEth()).fetch_fee_data()
        assert fee.gas_price == 30_000_000_000
        assert fee.max_priority_fee_per_gas == 2_000_000_000
        assert fee.max_fee_per_gas == 2 * 20_000_000_000 + 2_000_000_000

    def test_legacy_chain_has_no_eip1559_fields(self):
        fee = _client(FakeEth(block={"number": 1})).fetch_fee_data()
        assert fee.gas_price == 30_000_000_000
        assert fee.max_fee_per_gas is None
        assert fee.max_priority_fee_per_gas is None

    def test_priority_fee_falls_back_when_rpc_method_missing(self):
        eth = FakeEth(max_priority_fee=ValueError("method not found"))
        fee = _client(eth).fetch_fee_data()
        assert fee.max_priority_fee_per_gas == DEFAULT_PRIORITY_FEE_WEI
        assert fee.max_fee_per_gas == 2 * 20_000_000_000 + DEFAULT_PRIORITY_FEE_WEI

    def test_transport_error_is_unreachable(self):
        with pytest.raises(ChainUnreachableError) as exc_info:
            _client(FakeEth(error=ConnectionError("refused"))).fetch_fee_data()
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_rpc_error_is_call_failed(self):
        with pytest.raises(RpcCallFailedError):
            _client(FakeEth(error=ValueError({"code": -32000}))).fetch_fee_data()


class TestReadContract:
    def test_encodes_call_and_unwraps_single_output(self):
        eth = FakeEth(call_result=encode(["address"], [PAIR]))

        result = _client(eth).read_contract(FACTORY, "getPair(address,address)(address)", (DAI, WETH))

        assert result.lower() == PAIR
        tx = eth.calls[0]
        assert tx["to"] == FACTORY
        data = tx["data"]
        assert data.startswith("0xe6a43905")
        assert DAI[2:] in data.lower()
        assert WETH[2:].lower() in data.lower()

    def test_returns_tuple_for_multiple_outputs(self):
        reserves = (2**111, 12345, 1704067200)
        eth = FakeEth(call_result=encode(["uint112", "uint112", "uint32"], list(reserves)))

        result = _client(eth).read_contract(PAIR, "getReserves()(uint112,uint112,uint32)")

        assert result == reserves

    def test_checksums_target_address(self):
        eth = FakeEth(call_result=encode(["uint8"], [18]))

        assert _client(eth).read_contract(DAI, "decimals()(uint8)") == 18
        assert eth.calls[0]["to"] == "0x6B175474E89094C44Da98b954EedeAC495271d0F"

    def test_wrong_arg_count_is_rejected(self):
        with pytest.raises(ValueError):
            _client(FakeEth()).read_contract(FACTORY, "getPair(address,address)(address)", (DAI,))

    def test_undecodable_result_is_call_failed(self):
        eth = FakeEth(call_result=b"")

        with pytest.raises(RpcCallFailedError):
            _client(eth).read_contract(DAI, "decimals()(uint8)")


class TestIsReachable:
    def test_reachable(self):
        assert _client(FakeEth()).is_reachable() is True

    def test_unreachable_never_raises(self):
        assert _client(FakeEth(error=ConnectionError("refused"))).is_reachable() is False


def test_rpc_url_appends_api_key():
    client = _client(FakeEth(), api_key="secret")
    assert client._build_rpc_url() == "https://mainnet.infura.io/v3/secret"
    assert _client(FakeEth())._build_rpc_url() == "https://mainnet.infura.io/v3"
