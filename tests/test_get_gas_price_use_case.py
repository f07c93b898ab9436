from __future__ import annotations

import pytest

from app.application.use_cases.get_gas_price import GetGasPriceUseCase
from app.domain.entities.gas_price import FeeData, GasPriceSnapshot
from app.domain.exceptions import ChainUnreachableError, RpcCallFailedError
from app.infrastructure.cache.gas_price_cache import InMemoryGasPriceCache


class FakeChainPort:
    def __init__(self, *, fee_data: FeeData | None = None, fetch_error: Exception | None = None):
        self.fee_data = fee_data or FeeData(gas_price=11, max_fee_per_gas=None, max_priority_fee_per_gas=1)
        self.fetch_error = fetch_error
        self.fetch_calls = 0

    def is_reachable(self) -> bool:
        return True

    def fetch_fee_data(self) -> FeeData:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.fee_data

    def read_contract(self, address, method_signature, args=()):
        raise AssertionError("gas price reads must not read contracts")


def _use_case(port, cache, now: float) -> GetGasPriceUseCase:
    return GetGasPriceUseCase(chain_port=port, cache=cache, ttl_seconds=300, clock=lambda: now)


def _cached(captured_at: float) -> GasPriceSnapshot:
    return GasPriceSnapshot(gas_price=7, max_fee_per_gas=8, max_priority_fee_per_gas=9, captured_at=captured_at)


def test_cache_hit_never_fetches():
    port = FakeChainPort()
    cache = InMemoryGasPriceCache()
    cache.set(_cached(captured_at=990.0))

    result = _use_case(port, cache, now=1000.0).execute()

    assert port.fetch_calls == 0
    assert result.snapshot.gas_price == 7
    assert result.is_fresh is True
    assert result.age_seconds == 10.0


def test_stale_snapshot_is_served_without_fetch():
    port = FakeChainPort()
    cache = InMemoryGasPriceCache()
    cache.set(_cached(captured_at=0.0))

    result = _use_case(port, cache, now=301.0).execute()

    assert port.fetch_calls == 0
    assert result.is_fresh is False
    assert result.snapshot.gas_price == 7


def test_empty_cache_fetches_synchronously_and_populates():
    port = FakeChainPort()
    cache = InMemoryGasPriceCache()

    result = _use_case(port, cache, now=50.0).execute()

    assert port.fetch_calls == 1
    assert result.snapshot.gas_price == 11
    assert result.snapshot.max_fee_per_gas == 0
    assert cache.get() is result.snapshot
    assert result.is_fresh is True


def test_first_fetch_failure_propagates_domain_error():
    port = FakeChainPort(fetch_error=ChainUnreachableError("down"))

    with pytest.raises(ChainUnreachableError):
        _use_case(port, InMemoryGasPriceCache(), now=0.0).execute()


def test_first_fetch_unexpected_failure_is_wrapped():
    port = FakeChainPort(fetch_error=KeyError("baseFeePerGas"))

    with pytest.raises(RpcCallFailedError) as exc_info:
        _use_case(port, InMemoryGasPriceCache(), now=0.0).execute()

    assert isinstance(exc_info.value.__cause__, KeyError)


def test_fetch_failure_falls_back_to_snapshot_installed_concurrently():
    cache = InMemoryGasPriceCache()
    raced = _cached(captured_at=10.0)

    class RacingPort(FakeChainPort):
        def fetch_fee_data(self) -> FeeData:
            cache.set(raced)
            raise RpcCallFailedError("late failure")

    result = _use_case(RacingPort(), cache, now=20.0).execute()

    assert result.snapshot is raced
