"""
Core package.

Cross-cutting infrastructure shared by the orchestrator and the consumers.
"""

from .callbacks import HandlerCallbacks, run_callbacks
from .events import HandlerEventEmitter, HandlerEventType, Subscription
from .exceptions import (
    ConfigurationError,
    ContinuationError,
    HandlerCustomError,
    HandlerFactoryError,
    MessageConsumptionError,
    MessageDeletionError,
)
from .watchdog import DeadlineWatchdog

__all__ = [
    "ConfigurationError",
    "ContinuationError",
    "DeadlineWatchdog",
    "HandlerCallbacks",
    "HandlerCustomError",
    "HandlerEventEmitter",
    "HandlerEventType",
    "HandlerFactoryError",
    "MessageConsumptionError",
    "MessageDeletionError",
    "Subscription",
    "run_callbacks",
]
