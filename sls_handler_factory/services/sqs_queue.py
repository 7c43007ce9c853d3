"""
SQS Queue Service

Receives and batch-deletes messages through boto3. boto3 is blocking, so
calls run in a worker thread to keep the event loop (and the deadline
watchdog) responsive.
"""

import asyncio
import logging
from typing import List, Protocol, Sequence

from ..models.message import DeleteBatchResult, FailedDeletion, QueueMessage

logger = logging.getLogger("handler_factory.sqs")


class QueueService(Protocol):
    async def receive(self, max_messages: int) -> List[QueueMessage]: ...

    async def delete_batch(self, messages: Sequence[QueueMessage]) -> DeleteBatchResult: ...


class SqsQueueClient:
    def __init__(self, client, queue_url: str):
        """
        Args:
            client: boto3 SQS client
            queue_url: URL of the queue
        """
        self.client = client
        self.queue_url = queue_url

    async def receive(self, max_messages: int) -> List[QueueMessage]:
        response = await asyncio.to_thread(
            self.client.receive_message,
            QueueUrl=self.queue_url,
            MaxNumberOfMessages=max_messages,
        )
        messages = [QueueMessage.from_sqs(raw) for raw in response.get("Messages", [])]
        logger.debug(f"Received {len(messages)} messages", extra={"queue_url": self.queue_url})
        return messages

    async def delete_batch(self, messages: Sequence[QueueMessage]) -> DeleteBatchResult:
        entries = [{"Id": m.message_id, "ReceiptHandle": m.receipt_handle} for m in messages]
        response = await asyncio.to_thread(
            self.client.delete_message_batch,
            QueueUrl=self.queue_url,
            Entries=entries,
        )
        return DeleteBatchResult(
            successful=[entry["Id"] for entry in response.get("Successful", [])],
            failed=[
                FailedDeletion(
                    id=entry["Id"],
                    code=entry.get("Code", ""),
                    message=entry.get("Message"),
                    sender_fault=entry.get("SenderFault", False),
                )
                for entry in response.get("Failed", [])
            ],
        )
