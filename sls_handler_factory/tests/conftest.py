import json
from unittest.mock import AsyncMock

import pytest

from sls_handler_factory.models import DeleteBatchResult, LocalLambdaContext, QueueMessage
from sls_handler_factory.services import AwsLambdaHandlerFactory, SqsFifoConsumerHandlerFactory


def make_message(index: int, payload=None) -> QueueMessage:
    body = payload if payload is not None else {"seq": index}
    return QueueMessage(
        message_id=f"msg-{index}",
        receipt_handle=f"receipt-{index}",
        body=body if isinstance(body, str) else json.dumps(body),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep settings deterministic regardless of the developer's shell."""
    for key in (
        "LOG_LEVEL",
        "SQS_QUEUE_URL",
        "SQS_MAX_NUMBER_OF_MESSAGES",
        "TIMEOUT_SECURE_MARGIN_MS",
        "RECEIVE_RETRY_DELAY_MS",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def lambda_context():
    return LocalLambdaContext(
        function_name="fifo-consumer",
        aws_request_id="req-1",
        log_group_name="/aws/lambda/fifo-consumer",
        log_stream_name="2026/10/18/[$LATEST]abc",
        timeout_ms=60_000,
    )


@pytest.fixture
def handler_factory():
    return AwsLambdaHandlerFactory()


@pytest.fixture
def mock_queue():
    queue = AsyncMock()
    queue.receive.return_value = []

    async def delete_all(messages):
        return DeleteBatchResult(successful=[m.message_id for m in messages])

    queue.delete_batch.side_effect = delete_all
    return queue


@pytest.fixture
def mock_invoker():
    return AsyncMock()


@pytest.fixture
def consumer(mock_queue, mock_invoker, handler_factory):
    return SqsFifoConsumerHandlerFactory(
        queue=mock_queue,
        invoker=mock_invoker,
        handler_factory=handler_factory,
        retry_delay_ms=10,
    )


@pytest.fixture
def recorded_events(handler_factory):
    """Record (event, args) for every lifecycle event."""
    from sls_handler_factory.core.events import HandlerEventType

    records = []
    for event_type in HandlerEventType:
        handler_factory.on(
            event_type, lambda *args, _e=event_type: records.append((_e.value, args))
        )
    return records
