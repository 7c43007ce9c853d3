"""
Queue message models.

Message bodies are opaque to the consumer apart from JSON decoding.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class QueueMessage(BaseModel):
    """A received message and the receipt handle proving its delivery."""

    message_id: str
    receipt_handle: str
    body: str
    attributes: Dict[str, str] = Field(default_factory=dict)
    md5_of_body: Optional[str] = None

    @classmethod
    def from_sqs(cls, raw: Dict[str, Any]) -> "QueueMessage":
        """Build from one entry of ReceiveMessage's `Messages`."""
        return cls(
            message_id=raw["MessageId"],
            receipt_handle=raw["ReceiptHandle"],
            body=raw.get("Body", ""),
            attributes=raw.get("Attributes", {}),
            md5_of_body=raw.get("MD5OfBody"),
        )


class FailedDeletion(BaseModel):
    """One entry of DeleteMessageBatch's `Failed` list."""

    id: str
    code: str = ""
    message: Optional[str] = None
    sender_fault: bool = False


class DeleteBatchResult(BaseModel):
    successful: List[str] = Field(default_factory=list)
    failed: List[FailedDeletion] = Field(default_factory=list)

    @property
    def failed_ids(self) -> List[str]:
        return [entry.id for entry in self.failed]


class ConsumerInvocationInput(BaseModel):
    """Input accepted by a FIFO consumer invocation (scheduled event or continuation)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    retry_messages_get: bool = Field(default=False, alias="retryMessagesGet")


class ContinuationEnv(BaseModel):
    """Identity of the invocation that triggered a continuation."""

    model_config = ConfigDict(populate_by_name=True)

    aws_request_id: Optional[str] = Field(default=None, alias="awsRequestId")
    function_name: Optional[str] = Field(default=None, alias="functionName")
    log_group_name: Optional[str] = Field(default=None, alias="logGroupName")
    log_stream_name: Optional[str] = Field(default=None, alias="logStreamName")


class ContinuationPayload(BaseModel):
    """Payload sent to the next invocation of the same function."""

    model_config = ConfigDict(populate_by_name=True)

    env: ContinuationEnv
    retry_messages_get: bool = Field(default=True, alias="retryMessagesGet")

    @classmethod
    def from_context(cls, context: Any) -> "ContinuationPayload":
        return cls(
            env=ContinuationEnv(
                aws_request_id=getattr(context, "aws_request_id", None),
                function_name=getattr(context, "function_name", None),
                log_group_name=getattr(context, "log_group_name", None),
                log_stream_name=getattr(context, "log_stream_name", None),
            )
        )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
