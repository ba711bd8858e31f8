import logging
import threading
from typing import Callable

from .logging_setup import get_logger


class Ticker:
    """Calls ``callback`` every ``interval_sec`` on a daemon thread.

    Calls never overlap: the next wait starts only after the callback returns.
    """

    def __init__(
        self,
        interval_sec: float,
        callback: Callable[[], None],
        name: str = "ticker",
        logger: logging.Logger | None = None,
    ):
        if interval_sec <= 0:
            raise ValueError(f"interval must be positive, got {interval_sec}")
        self._interval = float(interval_sec)
        self._callback = callback
        self._name = name
        self._logger = get_logger(logger)
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name=self._name,
            daemon=True,
        )
        self._thread.start()
        self._logger.info(f"Ticker started name={self._name} interval={self._interval:.1f}s")

    def stop(self, timeout: float | None = 2.0) -> None:
        self._stop_event.set()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            self._logger.info(f"Ticker stopped name={self._name}")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                self._logger.exception(f"Ticker {self._name} callback failed")
