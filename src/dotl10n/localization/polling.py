"""Cancellable periodic reload trigger.

ReloadPoller runs a callback on a daemon thread at a fixed interval until
stopped. The callback decides whether anything changed; the poller only
keeps time. Errors raised by the callback are logged and the poller keeps
running: expected I/O failures at DEBUG, anything else at WARNING with a
traceback.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from dotl10n.constants import DEFAULT_RELOAD_INTERVAL
from dotl10n.diagnostics import LocalizationError

__all__ = ["ReloadPoller"]

logger = logging.getLogger(__name__)


class ReloadPoller:
    """Fixed-interval background trigger with clean shutdown.

    Example:
        >>> poller = ReloadPoller(l10n.check_for_updates, interval=2.0)
        >>> poller.start()
        >>> ...
        >>> poller.stop()

    Thread Safety:
        start() and stop() may be called from any thread. stop() called
        from inside the callback does not wait for its own thread.
    """

    __slots__ = ("_callback", "_interval", "_lock", "_name", "_stop_event", "_thread")

    def __init__(
        self,
        callback: Callable[[], object],
        interval: float = DEFAULT_RELOAD_INTERVAL,
        *,
        name: str = "dotl10n-reload",
    ) -> None:
        """Initialize poller.

        Args:
            callback: Called once per tick
            interval: Seconds between ticks
            name: Thread name

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            msg = f"interval must be positive, got {interval}"
            raise ValueError(msg)
        self._callback = callback
        self._interval = interval
        self._name = name
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def __repr__(self) -> str:
        return f"ReloadPoller(interval={self._interval}, running={self.is_running})"

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stop_event.is_set()

    def start(self) -> None:
        """Start ticking. Has no effect while already running."""
        with self._lock:
            if self.is_running:
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(self._stop_event,), name=self._name, daemon=True
            )
            self._thread.start()
            logger.debug("Reload polling started every %.1fs", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        """Stop ticking and wait for the thread to finish. Idempotent.

        Args:
            timeout: Seconds to wait for the thread; None waits until done
        """
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._thread = None

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            logger.debug("Reload polling stopped")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            try:
                self._callback()
            except (LocalizationError, OSError, ValueError) as e:
                logger.debug("Reload check error: %s", e)
            except Exception:  # noqa: BLE001 - a failing tick must not end polling
                logger.warning("Unexpected reload check error", exc_info=True)
