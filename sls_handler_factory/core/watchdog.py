import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger("handler_factory.watchdog")

DEFAULT_SECURE_MARGIN_MS = 500


class DeadlineWatchdog:
    """
    One-shot timer that fires before the runtime kills the invocation.

    Advisory only: on_timeout is called from the event loop while the handler
    keeps running; nothing is cancelled.
    """

    def __init__(self, on_timeout: Callable[[], Any], secure_margin_ms: int = DEFAULT_SECURE_MARGIN_MS):
        self.on_timeout = on_timeout
        self.secure_margin_ms = secure_margin_ms
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def armed(self) -> bool:
        return self._timer is not None

    def start(self, context: Any) -> Optional[float]:
        """
        Arm the timer from the context's remaining time.

        Returns:
            The delay in milliseconds, or None if the watchdog stays inert
        """
        get_remaining = getattr(context, "get_remaining_time_in_millis", None)
        if get_remaining is None:
            return None

        deadline_ms = get_remaining() - self.secure_margin_ms
        if deadline_ms <= 0:
            logger.debug(f"Deadline already within the safety margin ({deadline_ms} ms)")
            return None

        self.stop()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(deadline_ms / 1000, self._fire)
        return deadline_ms

    def stop(self) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None

    def _fire(self) -> None:
        self._timer = None
        logger.warning("Invocation is about to time out")
        self.on_timeout()
