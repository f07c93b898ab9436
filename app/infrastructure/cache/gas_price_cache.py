from __future__ import annotations

from threading import Lock

from app.domain.entities.gas_price import GasPriceSnapshot


class InMemoryGasPriceCache:
    """Single-slot holder for the latest gas price snapshot."""

    def __init__(self):
        self._snapshot: GasPriceSnapshot | None = None
        self._lock = Lock()

    def get(self) -> GasPriceSnapshot | None:
        with self._lock:
            return self._snapshot

    def set(self, snapshot: GasPriceSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def is_valid(self, *, now: float, ttl_seconds: float) -> bool:
        snapshot = self.get()
        if snapshot is None:
            return False
        return now - snapshot.captured_at < ttl_seconds
