"""Caller-side refresh scheduling.

The fetch pipeline is stateless; this module owns the only state involved in
refreshing: when the last successful refresh happened and the report it
produced. A trigger (a timer tick, the page becoming visible again, ...)
calls ``RefreshScheduler.trigger``, which re-runs the pipeline only once the
threshold has elapsed.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from balmy.datasources.nws.models import WeatherReport
from balmy.errors import BalmyError

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = timedelta(minutes=5)


class RefreshScheduler:
    """Re-run a report pipeline when the last refresh is older than a threshold."""

    def __init__(
        self,
        pipeline: Callable[[], WeatherReport],
        threshold: timedelta = DEFAULT_THRESHOLD,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.pipeline = pipeline
        self.threshold = threshold
        self.clock = clock
        self.last_refreshed_at: datetime | None = None
        self.report: WeatherReport | None = None

    def is_due(self, now: datetime | None = None) -> bool:
        """True if never refreshed, or the threshold has elapsed since the last refresh."""
        if self.last_refreshed_at is None:
            return True
        now = now or self.clock()
        return now - self.last_refreshed_at >= self.threshold

    def trigger(self, now: datetime | None = None) -> bool:
        """
        Refresh if due.

        A failed refresh keeps the previous report and refresh time, so the
        next trigger tries again.

        Returns:
            True if a new report was produced.
        """
        now = now or self.clock()
        if not self.is_due(now):
            return False

        try:
            report = self.pipeline()
        except BalmyError as exc:
            logger.warning("Refresh failed, keeping previous report: %s", exc)
            return False

        self.report = report
        self.last_refreshed_at = now
        logger.info("Refreshed report at %s", now.isoformat())
        return True

    def run_forever(
        self,
        interval_seconds: float,
        on_refresh: Callable[[WeatherReport], None] | None = None,
        max_ticks: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Fire ``trigger`` every ``interval_seconds``.

        Args:
            interval_seconds: Seconds between triggers.
            on_refresh: Called with each new report.
            max_ticks: Stop after this many triggers (None = forever).
            sleep: Sleep function (swapped out in tests).
        """
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            if self.trigger() and on_refresh is not None and self.report is not None:
                on_refresh(self.report)
            ticks += 1
            if max_ticks is None or ticks < max_ticks:
                sleep(interval_seconds)
