import json

import boto3
import pytest
from botocore.stub import Stubber

from sls_handler_factory.clients import create_lambda_client, create_sqs_client
from sls_handler_factory.config import HandlerFactoryConfig
from sls_handler_factory.core.exceptions import ContinuationError
from sls_handler_factory.services.lambda_invoker import LambdaContinuationInvoker
from sls_handler_factory.services.sqs_queue import SqsQueueClient
from sls_handler_factory.tests.conftest import make_message

QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/orders.fifo"


def _client(service):
    return boto3.client(
        service,
        region_name="us-east-1",
        aws_access_key_id="dummy",
        aws_secret_access_key="dummy",
    )


@pytest.fixture
def sqs_client():
    client = _client("sqs")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def lambda_client():
    client = _client("lambda")
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


class TestSqsQueueClient:
    @pytest.mark.asyncio
    async def test_receive_maps_messages(self, sqs_client):
        client, stubber = sqs_client
        stubber.add_response(
            "receive_message",
            {
                "Messages": [
                    {"MessageId": "m1", "ReceiptHandle": "r1", "Body": '{"a": 1}'},
                    {"MessageId": "m2", "ReceiptHandle": "r2", "Body": '{"a": 2}'},
                ]
            },
            {"QueueUrl": QUEUE_URL, "MaxNumberOfMessages": 10},
        )

        messages = await SqsQueueClient(client, QUEUE_URL).receive(10)

        assert [(m.message_id, m.receipt_handle, m.body) for m in messages] == [
            ("m1", "r1", '{"a": 1}'),
            ("m2", "r2", '{"a": 2}'),
        ]

    @pytest.mark.asyncio
    async def test_receive_without_messages_key(self, sqs_client):
        client, stubber = sqs_client
        stubber.add_response("receive_message", {}, {"QueueUrl": QUEUE_URL, "MaxNumberOfMessages": 3})

        assert await SqsQueueClient(client, QUEUE_URL).receive(3) == []

    @pytest.mark.asyncio
    async def test_delete_batch_reports_failures(self, sqs_client):
        client, stubber = sqs_client
        stubber.add_response(
            "delete_message_batch",
            {
                "Successful": [{"Id": "msg-1"}],
                "Failed": [
                    {
                        "Id": "msg-2",
                        "SenderFault": True,
                        "Code": "ReceiptHandleIsInvalid",
                        "Message": "expired",
                    }
                ],
            },
            {
                "QueueUrl": QUEUE_URL,
                "Entries": [
                    {"Id": "msg-1", "ReceiptHandle": "receipt-1"},
                    {"Id": "msg-2", "ReceiptHandle": "receipt-2"},
                ],
            },
        )

        result = await SqsQueueClient(client, QUEUE_URL).delete_batch(
            [make_message(1), make_message(2)]
        )

        assert result.successful == ["msg-1"]
        assert result.failed_ids == ["msg-2"]
        assert result.failed[0].code == "ReceiptHandleIsInvalid"
        assert result.failed[0].sender_fault is True


class TestLambdaContinuationInvoker:
    @pytest.mark.asyncio
    async def test_invokes_with_event_type(self, lambda_client):
        client, stubber = lambda_client
        payload = {"env": {"functionName": "fifo-consumer"}, "retryMessagesGet": True}
        stubber.add_response(
            "invoke",
            {"StatusCode": 202},
            {
                "FunctionName": "fifo-consumer",
                "InvocationType": "Event",
                "Payload": json.dumps(payload),
            },
        )

        await LambdaContinuationInvoker(client).invoke_async("fifo-consumer", payload)

    @pytest.mark.asyncio
    async def test_client_error_is_wrapped(self, lambda_client):
        client, stubber = lambda_client
        stubber.add_client_error("invoke", service_error_code="TooManyRequestsException")

        with pytest.raises(ContinuationError) as exc:
            await LambdaContinuationInvoker(client).invoke_async("fifo-consumer", {})

        assert exc.value.function_name == "fifo-consumer"

    @pytest.mark.asyncio
    async def test_unexpected_status_code(self, lambda_client):
        client, stubber = lambda_client
        stubber.add_response("invoke", {"StatusCode": 200})

        with pytest.raises(ContinuationError, match="unexpected status code 200"):
            await LambdaContinuationInvoker(client).invoke_async("fifo-consumer", {})


class TestClientFactories:
    def test_endpoint_overrides(self):
        config = HandlerFactoryConfig(
            AWS_REGION="us-east-1",
            SQS_ENDPOINT_URL="http://localhost:4566",
            LAMBDA_ENDPOINT_URL="http://localhost:4567",
        )

        assert create_sqs_client(config).meta.endpoint_url == "http://localhost:4566"
        assert create_lambda_client(config).meta.endpoint_url == "http://localhost:4567"

    def test_default_region_endpoint(self):
        config = HandlerFactoryConfig(AWS_REGION="eu-west-1")

        assert "eu-west-1" in create_sqs_client(config).meta.endpoint_url
