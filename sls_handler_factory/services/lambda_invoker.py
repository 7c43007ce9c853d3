"""
Lambda Continuation Invoker

Dispatches an asynchronous (InvocationType=Event) invocation through boto3.
The call returns once Lambda has queued the event; the new invocation's
outcome is never observed.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Protocol

from ..core.exceptions import ContinuationError

logger = logging.getLogger("handler_factory.lambda_invoker")


class ContinuationInvoker(Protocol):
    async def invoke_async(self, function_name: str, payload: Dict[str, Any]) -> None: ...


class LambdaContinuationInvoker:
    def __init__(self, client):
        """
        Args:
            client: boto3 Lambda client
        """
        self.client = client

    async def invoke_async(self, function_name: str, payload: Dict[str, Any]) -> None:
        """
        Raises:
            ContinuationError: the event could not be queued
        """
        try:
            response = await asyncio.to_thread(
                self.client.invoke,
                FunctionName=function_name,
                InvocationType="Event",
                Payload=json.dumps(payload),
            )
        except Exception as e:
            raise ContinuationError(function_name, e) from e

        status_code = response.get("StatusCode")
        if status_code != 202:
            raise ContinuationError(
                function_name, RuntimeError(f"unexpected status code {status_code}")
            )
        logger.info(f"Continuation queued for {function_name}")
