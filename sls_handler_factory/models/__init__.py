"""
Data model definitions package.

Aggregates Pydantic models and invocation outcomes for use in other modules.
"""

from .context import LambdaContext, LocalLambdaContext
from .message import (
    ConsumerInvocationInput,
    ContinuationEnv,
    ContinuationPayload,
    DeleteBatchResult,
    FailedDeletion,
    QueueMessage,
)
from .result import (
    ExpectedFailure,
    InvocationOutcome,
    Succeeded,
    UnexpectedFailure,
    classify_failure,
)

__all__ = [
    "ConsumerInvocationInput",
    "ContinuationEnv",
    "ContinuationPayload",
    "DeleteBatchResult",
    "ExpectedFailure",
    "FailedDeletion",
    "InvocationOutcome",
    "LambdaContext",
    "LocalLambdaContext",
    "QueueMessage",
    "Succeeded",
    "UnexpectedFailure",
    "classify_failure",
]
