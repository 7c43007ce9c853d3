"""
Custom exception classes.

Represent failures raised by handlers, extensions and the FIFO consumer.
"""

from typing import Any, List


class HandlerFactoryError(Exception):
    """Base exception class for the handler factory."""

    pass


class HandlerCustomError(HandlerFactoryError):
    """
    Expected (business-level) failure.

    Carries the response the invocation should complete with instead of
    failing. The orchestrator converts it into a success-shaped completion.
    """

    def __init__(self, response: Any, message: str = "Handler custom error"):
        self.response = response
        super().__init__(message)


class ConfigurationError(HandlerFactoryError):
    """Raised when required configuration is missing."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Missing required setting: {setting}")


class MessageConsumptionError(HandlerFactoryError):
    """Raised when a queue message cannot be turned into a payload."""

    def __init__(self, message_id: str, cause: Exception):
        self.message_id = message_id
        self.cause = cause
        super().__init__(f"Failed to consume message {message_id}: {cause}")


class MessageDeletionError(HandlerFactoryError):
    """Raised when some processed messages could not be acknowledged."""

    def __init__(self, failed: List[Any]):
        self.failed = failed
        ids = ", ".join(entry.id for entry in failed)
        super().__init__(f"Error deleting some SQS messages: {ids}")

    @property
    def failed_ids(self) -> List[str]:
        return [entry.id for entry in self.failed]


class ContinuationError(HandlerFactoryError):
    """Raised when the continuation invocation could not be dispatched."""

    def __init__(self, function_name: str, cause: Exception):
        self.function_name = function_name
        self.cause = cause
        super().__init__(f"Continuation dispatch failed for {function_name}: {cause}")
