"""
Services package.

Provides the lifecycle orchestrator, the FIFO consumer and the AWS integrations.
"""

from .fifo_consumer import ConsumerCallbacks, SqsFifoConsumerHandlerFactory
from .handler_decorator import decorate_handler_with_callbacks
from .handler_factory import AwsLambdaHandlerFactory, LambdaEntryPoint
from .lambda_invoker import ContinuationInvoker, LambdaContinuationInvoker
from .sqs_queue import QueueService, SqsQueueClient

__all__ = [
    "AwsLambdaHandlerFactory",
    "ConsumerCallbacks",
    "ContinuationInvoker",
    "LambdaContinuationInvoker",
    "LambdaEntryPoint",
    "QueueService",
    "SqsFifoConsumerHandlerFactory",
    "SqsQueueClient",
    "decorate_handler_with_callbacks",
]
