"""Periodic tick trigger for Buddy's Treehouse.

The TickScheduler calls ``BuddyStore.tick()`` at a fixed real-world
interval from a background thread. The interval is host policy (the
default is once a minute). The thread is acquired by ``start()`` and
released by ``stop()``; once ``stop()`` returns no further tick can reach
the store.

Usage:
    with TickScheduler(store, interval=60.0):
        run_shell()
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Optional

from treehouse.core.rules import DEFAULT_TICK_INTERVAL_SECONDS
from treehouse.utils.logging import get_logger, log_error

if TYPE_CHECKING:
    from treehouse.core.store import BuddyStore


logger = get_logger("scheduler")


class TickScheduler:
    """Cancellable periodic driver of the needs-decay step."""

    def __init__(self, store: "BuddyStore", interval: float = DEFAULT_TICK_INTERVAL_SECONDS):
        """Initialize the scheduler.

        Args:
            store: Store whose ``tick`` is invoked
            interval: Seconds between ticks

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.store = store
        self.interval = interval
        self.ticks = 0
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking. Calling start on a running scheduler does nothing."""
        if self.is_running:
            return
        # A worker that outlived a timed-out stop keeps its own, already-set event
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), name="buddy-tick", daemon=True,
        )
        self._thread.start()
        logger.info(f"Tick scheduler started (every {self.interval:g}s)")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop ticking and wait for the worker thread to exit.

        Args:
            timeout: Max seconds to wait for an in-flight tick to finish. If
                the wait times out, that tick may still land, but the worker
                exits right after it, even if the scheduler is restarted.
        """
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info(f"Tick scheduler stopped after {self.ticks} tick(s)")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            try:
                self.store.tick()
            except Exception as e:
                log_error(logger, "scheduled tick", e, {"ticks": self.ticks})
                continue
            self.ticks += 1

    def __enter__(self) -> "TickScheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
