import time

from sls_handler_factory.core.exceptions import HandlerCustomError, MessageDeletionError
from sls_handler_factory.models import (
    ConsumerInvocationInput,
    ContinuationPayload,
    FailedDeletion,
    LocalLambdaContext,
    QueueMessage,
)
from sls_handler_factory.models.result import (
    ExpectedFailure,
    Succeeded,
    UnexpectedFailure,
    classify_failure,
    is_success_shaped,
)


def test_classify_failure():
    rejection = HandlerCustomError({"error": "invalid"})
    boom = ValueError("boom")

    assert classify_failure(rejection) == ExpectedFailure({"error": "invalid"}, rejection)
    assert classify_failure(boom) == UnexpectedFailure(boom)
    assert is_success_shaped(Succeeded(1))
    assert is_success_shaped(ExpectedFailure(None, rejection))
    assert not is_success_shaped(UnexpectedFailure(boom))


def test_queue_message_from_sqs():
    message = QueueMessage.from_sqs(
        {"MessageId": "m1", "ReceiptHandle": "r1", "Body": "{}", "Attributes": {"MessageGroupId": "g"}}
    )

    assert message.message_id == "m1"
    assert message.attributes == {"MessageGroupId": "g"}


def test_invocation_input_accepts_wire_and_extra_fields():
    request = ConsumerInvocationInput.model_validate(
        {"retryMessagesGet": True, "env": {"functionName": "f"}}
    )

    assert request.retry_messages_get is True
    assert ConsumerInvocationInput.model_validate({}).retry_messages_get is False


def test_continuation_payload_wire_format():
    context = LocalLambdaContext(
        function_name="f", aws_request_id="r", log_group_name="g", log_stream_name="s"
    )

    assert ContinuationPayload.from_context(context).to_wire() == {
        "env": {
            "awsRequestId": "r",
            "functionName": "f",
            "logGroupName": "g",
            "logStreamName": "s",
        },
        "retryMessagesGet": True,
    }


def test_local_context_remaining_time():
    context = LocalLambdaContext(timeout_ms=1000, started_at=time.monotonic() - 0.4)

    assert 0 < context.get_remaining_time_in_millis() <= 600
    assert LocalLambdaContext(timeout_ms=10, started_at=0).get_remaining_time_in_millis() == 0


def test_message_deletion_error_lists_failed_ids():
    error = MessageDeletionError([FailedDeletion(id="a"), FailedDeletion(id="b")])

    assert error.failed_ids == ["a", "b"]
    assert "a, b" in str(error)
