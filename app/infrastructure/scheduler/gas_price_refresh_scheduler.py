from __future__ import annotations

import logging
from threading import Event, Lock, Thread

from app.application.use_cases.refresh_gas_price import RefreshGasPriceUseCase


logger = logging.getLogger(__name__)


class GasPriceRefreshScheduler:
    """Runs the refresh tick on a fixed period in a daemon thread."""

    def __init__(
        self,
        *,
        refresh_use_case: RefreshGasPriceUseCase,
        period_seconds: float,
        thread_name: str = "gas-price-refresher",
    ):
        if period_seconds <= 0:
            raise ValueError("period_seconds must be positive.")
        self._refresh_use_case = refresh_use_case
        self._period_seconds = period_seconds
        self._thread_name = thread_name
        self._stop_event = Event()
        self._lock = Lock()
        self._thread: Thread | None = None
        self._ticks = 0

    @property
    def ticks(self) -> int:
        """Number of completed refresh ticks, crashed ones included."""
        with self._lock:
            return self._ticks

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self._stop_event.clear()
            self._thread = Thread(target=self._run, daemon=True, name=self._thread_name)
            self._thread.start()
        logger.info(
            "gas_price_scheduler: started thread=%s period_seconds=%s",
            self._thread_name,
            self._period_seconds,
        )

    def stop(self, timeout: float = 1.0) -> None:
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._thread = None
        if thread is not None:
            thread.join(timeout=timeout)
            logger.info("gas_price_scheduler: stopped thread=%s", self._thread_name)

    def run_once(self) -> None:
        try:
            result = self._refresh_use_case.execute()
        except Exception as exc:  # noqa: BLE001
            logger.error("gas_price_scheduler: tick_crashed detail=%s", exc, exc_info=True)
            return
        finally:
            with self._lock:
                self._ticks += 1
        logger.debug("gas_price_scheduler: tick status=%s", result.status)

    def _run(self) -> None:
        # first tick runs immediately so the cache is warm before traffic arrives
        while not self._stop_event.is_set():
            self.run_once()
            if self._stop_event.wait(self._period_seconds):
                break
