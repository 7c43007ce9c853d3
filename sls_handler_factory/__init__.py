"""
sls_handler_factory

Lifecycle orchestration for Lambda handlers and an SQS FIFO consumer
that drains its queue across invocations.
"""

from .config import HandlerFactoryConfig
from .core import (
    HandlerCustomError,
    HandlerEventType,
    MessageDeletionError,
)
from .core.logging_config import setup_logging
from .models import ExpectedFailure, LocalLambdaContext, Succeeded, UnexpectedFailure
from .services import (
    AwsLambdaHandlerFactory,
    SqsFifoConsumerHandlerFactory,
    decorate_handler_with_callbacks,
)

__all__ = [
    "AwsLambdaHandlerFactory",
    "ExpectedFailure",
    "HandlerCustomError",
    "HandlerEventType",
    "HandlerFactoryConfig",
    "LocalLambdaContext",
    "MessageDeletionError",
    "SqsFifoConsumerHandlerFactory",
    "Succeeded",
    "UnexpectedFailure",
    "decorate_handler_with_callbacks",
    "setup_logging",
]
