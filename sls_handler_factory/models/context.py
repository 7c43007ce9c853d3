"""
Invocation context models.

The runtime supplies the context; the core only reads it.
"""

import time
import uuid
from typing import Protocol

from pydantic import BaseModel, Field


class LambdaContext(Protocol):
    """Attributes read from the Lambda context object."""

    function_name: str
    aws_request_id: str
    log_group_name: str
    log_stream_name: str


class LocalLambdaContext(BaseModel):
    """
    Context for running a handler outside Lambda (local runs, tests).

    Mirrors the attributes of the runtime's context object, including
    get_remaining_time_in_millis().
    """

    function_name: str = "local-function"
    aws_request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    log_group_name: str = "/aws/lambda/local-function"
    log_stream_name: str = "local"
    timeout_ms: int = 30_000
    started_at: float = Field(default_factory=time.monotonic)

    def get_remaining_time_in_millis(self) -> int:
        elapsed_ms = (time.monotonic() - self.started_at) * 1000
        return max(0, int(self.timeout_ms - elapsed_ms))
