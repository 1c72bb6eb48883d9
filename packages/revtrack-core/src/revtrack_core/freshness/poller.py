"""Periodic staleness checks on a background thread."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from revtrack_core.freshness.tracker import SourceTracker, StalenessReport

logger = logging.getLogger(__name__)


class FreshnessPoller:
    """Runs SourceTracker.check() every *interval* seconds.

    Each report with stale files is passed to *callback*. A failing callback
    or a failed check is logged and polling continues.
    """

    def __init__(
        self,
        tracker: SourceTracker,
        interval: float = 1.0,
        callback: Callable[[StalenessReport], None] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._tracker = tracker
        self._interval = interval
        self._callback = callback
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> StalenessReport:
        """Check once and dispatch the report. Errors from the check propagate."""
        report = self._tracker.check()
        if report.missing:
            logger.debug("%d tracked file(s) missing", len(report.missing))
        if report.stale:
            logger.debug("%d stale file(s) found", len(report.stale))
            if self._callback is not None:
                try:
                    self._callback(report)
                except Exception:
                    logger.exception("Poller callback failed")
        return report

    def start(self) -> None:
        """Begin polling on a daemon thread."""
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="revtrack-poller", daemon=True
        )
        self._thread.start()
        logger.info(
            "Polling %d director(ies) every %.2fs",
            len(self._tracker.watched_dirs()),
            self._interval,
        )

    def stop(self) -> None:
        """Stop polling and wait for the thread to exit."""
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout=5)
        self._thread = None
        logger.info("Stopped polling")

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self.poll_once()
            except OSError:
                logger.exception("Staleness check failed")
