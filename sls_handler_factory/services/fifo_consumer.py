"""
SQS FIFO consumer built on the lifecycle orchestrator.

One invocation: load a batch -> process it strictly in order -> (flush)
delete the processed messages in one request -> queue a continuation
invocation that loads the next batch.

Messages are acknowledged only when the whole invocation succeeded, so a
failure anywhere in the batch leaves every message of the batch on the
queue (at-least-once). Message handlers must be idempotent.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from ..config import HandlerFactoryConfig
from ..clients import create_lambda_client, create_sqs_client
from ..core.callbacks import Callback, call_maybe_async, run_callbacks
from ..core.exceptions import ConfigurationError, MessageConsumptionError, MessageDeletionError
from ..models.context import LambdaContext
from ..models.message import ConsumerInvocationInput, ContinuationPayload, QueueMessage
from .handler_factory import AwsLambdaHandlerFactory, LambdaEntryPoint
from .lambda_invoker import ContinuationInvoker, LambdaContinuationInvoker
from .sqs_queue import QueueService, SqsQueueClient

logger = logging.getLogger("handler_factory.fifo_consumer")

DEFAULT_MAX_NUMBER_OF_MESSAGES = 10
DEFAULT_RETRY_DELAY_MS = 500

MessageProcessor = Callable[[Any, Any], Union[Any, Awaitable[Any]]]


@dataclass
class ConsumerCallbacks:
    """
    - on_consuming_message(payload): notified before each message is processed;
      a failing observer is logged and never stops the message
    - on_message_consumption_error(error, message): notified when a message fails
    """

    on_consuming_message: List[Callback] = field(default_factory=list)
    on_message_consumption_error: List[Callback] = field(default_factory=list)


class SqsFifoConsumerHandlerFactory:
    def __init__(
        self,
        queue: QueueService,
        invoker: ContinuationInvoker,
        handler_factory: AwsLambdaHandlerFactory,
        max_number_of_messages: int = DEFAULT_MAX_NUMBER_OF_MESSAGES,
        retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS,
    ):
        """
        Args:
            queue: Queue service the batches are received from
            invoker: Dispatcher of continuation invocations
            handler_factory: Orchestrator the consumer registers itself into
            max_number_of_messages: Batch size (1-10)
            retry_delay_ms: Pause before re-polling an empty queue on continuations
        """
        if not 1 <= max_number_of_messages <= 10:
            raise ValueError(f"max_number_of_messages must be 1-10, got {max_number_of_messages}")

        self.queue = queue
        self.invoker = invoker
        self.handler_factory = handler_factory
        self.max_number_of_messages = max_number_of_messages
        self.retry_delay_ms = retry_delay_ms
        self.callbacks = ConsumerCallbacks()
        self.processed_messages: List[QueueMessage] = []

        handler_factory.callbacks.initialize.append(self._initialize)
        handler_factory.callbacks.flush.append(self._flush)

    @classmethod
    def from_config(
        cls,
        config: HandlerFactoryConfig,
        handler_factory: Optional[AwsLambdaHandlerFactory] = None,
    ) -> "SqsFifoConsumerHandlerFactory":
        """Build a consumer backed by boto3 clients."""
        if not config.SQS_QUEUE_URL:
            raise ConfigurationError("SQS_QUEUE_URL")

        return cls(
            queue=SqsQueueClient(create_sqs_client(config), config.SQS_QUEUE_URL),
            invoker=LambdaContinuationInvoker(create_lambda_client(config)),
            handler_factory=handler_factory or AwsLambdaHandlerFactory.from_config(config),
            max_number_of_messages=config.SQS_MAX_NUMBER_OF_MESSAGES,
            retry_delay_ms=config.RECEIVE_RETRY_DELAY_MS,
        )

    def build(self, process_message: MessageProcessor) -> LambdaEntryPoint:
        """
        Args:
            process_message: Called with (payload, context) for every message, in order
        """

        async def consume(event: Any, context: LambdaContext) -> Dict[str, int]:
            request = ConsumerInvocationInput.model_validate(
                event if isinstance(event, dict) else {}
            )
            messages = await self.load_messages(retry=request.retry_messages_get)
            for message in messages:
                await self._consume_message(message, process_message, context)
            return {"received": len(messages), "processed": len(self.processed_messages)}

        return self.handler_factory.build(consume)

    async def load_messages(self, retry: bool = False) -> List[QueueMessage]:
        messages = await self.queue.receive(self.max_number_of_messages)
        if retry and not messages:
            # A continuation can start before the queue shows the next messages.
            await asyncio.sleep(self.retry_delay_ms / 1000)
            messages = await self.queue.receive(self.max_number_of_messages)

        logger.info(f"Loaded {len(messages)} messages", extra={"retry": retry})
        return messages

    async def _consume_message(
        self, message: QueueMessage, process_message: MessageProcessor, context: LambdaContext
    ) -> None:
        try:
            payload = self._decode(message)
            await self._notify_consuming_message(payload, message)
            await call_maybe_async(process_message, payload, context)
        except Exception as e:
            logger.error(
                f"Message {message.message_id} failed: {e}",
                extra={"message_id": message.message_id},
            )
            await self._notify_consumption_error(e, message)
            raise

        self.processed_messages.append(message)

    async def _notify_consuming_message(self, payload: Any, message: QueueMessage) -> None:
        try:
            await run_callbacks(self.callbacks.on_consuming_message, payload)
        except Exception as callback_error:
            logger.error(
                f"on_consuming_message extension failed: {callback_error}",
                exc_info=True,
                extra={"message_id": message.message_id},
            )

    async def _notify_consumption_error(self, error: Exception, message: QueueMessage) -> None:
        try:
            await run_callbacks(self.callbacks.on_message_consumption_error, error, message)
        except Exception as callback_error:
            logger.error(
                f"on_message_consumption_error extension failed: {callback_error}",
                exc_info=True,
                extra={"message_id": message.message_id},
            )

    @staticmethod
    def _decode(message: QueueMessage) -> Any:
        try:
            return json.loads(message.body)
        except json.JSONDecodeError as e:
            raise MessageConsumptionError(message.message_id, e) from e

    def _initialize(self, event: Any, context: LambdaContext) -> None:
        self.processed_messages = []

    async def _flush(self, response: Any, context: LambdaContext) -> None:
        if not self.processed_messages:
            return
        await self.delete_processed_messages()
        await self.call_continue(context)

    async def delete_processed_messages(self) -> None:
        """
        Raises:
            MessageDeletionError: some messages were not acknowledged
        """
        result = await self.queue.delete_batch(self.processed_messages)
        if result.failed:
            logger.error(
                "Error deleting some SQS messages",
                extra={
                    "failed": [entry.model_dump() for entry in result.failed],
                    "deleted": result.successful,
                },
            )
            raise MessageDeletionError(result.failed)

        logger.info(f"Deleted {len(self.processed_messages)} messages")
        self.processed_messages = []

    async def call_continue(self, context: LambdaContext) -> None:
        """
        Queue the next invocation of this function.

        The acknowledgement is already committed at this point, so a dispatch
        failure is logged and the invocation still succeeds.
        """
        payload = ContinuationPayload.from_context(context)
        function_name = payload.env.function_name
        try:
            await self.invoker.invoke_async(function_name, payload.to_wire())
        except Exception as e:
            logger.error(
                f"Continuation dispatch failed: {e}",
                exc_info=True,
                extra={"target_function": function_name},
            )
