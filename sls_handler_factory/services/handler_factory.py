"""
Lifecycle orchestrator.

Wraps a handler `(input, context) -> output` with ordered extension phases,
lifecycle events, a deadline watchdog and the expected/unexpected failure
split. e.g.

    factory = AwsLambdaHandlerFactory()
    factory.on(HandlerEventType.ERROR, lambda err: logger.error(err))
    factory.callbacks.persist.append(save_domain_state)
    handle = factory.build(my_domain_logic)
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Union

from ..config import HandlerFactoryConfig
from ..core.callbacks import HandlerCallbacks, call_maybe_async, run_callbacks
from ..core.events import HandlerEventEmitter, HandlerEventType, Listener, Subscription
from ..core.logging_config import flush_log_handlers
from ..core.request_context import clear_invocation, set_invocation
from ..core.watchdog import DEFAULT_SECURE_MARGIN_MS, DeadlineWatchdog
from ..models.context import LambdaContext
from ..models.result import (
    ExpectedFailure,
    InvocationOutcome,
    Succeeded,
    classify_failure,
    is_success_shaped,
)

logger = logging.getLogger("handler_factory.orchestrator")

Handler = Callable[[Any, Any], Union[Any, Awaitable[Any]]]
CompletionCallback = Callable[[Optional[BaseException], Any], Any]


class LambdaEntryPoint:
    """
    Entry point produced by AwsLambdaHandlerFactory.build().

    Use `await entry.run(event, context)` from async code, or register the
    instance itself as the Lambda handler.
    """

    def __init__(self, factory: "AwsLambdaHandlerFactory", handler: Handler):
        self.factory = factory
        self.handler = handler

    async def run(self, event: Any, context: LambdaContext) -> InvocationOutcome:
        return await self.factory.execute(self.handler, event, context)

    def __call__(
        self, event: Any, context: LambdaContext, callback: Optional[CompletionCallback] = None
    ):
        try:
            outcome = asyncio.run(self.run(event, context))
        finally:
            # Lambda may freeze the process right after we return.
            flush_log_handlers()

        if not is_success_shaped(outcome):
            if callback is None:
                raise outcome.error
            callback(outcome.error, None)
            return None

        if callback is None:
            return outcome.response
        callback(None, outcome.response)
        return None


class AwsLambdaHandlerFactory:
    """
    The base factory for creating handlers.

    Attributes:
        events: Emitter of the HandlerEventType events (owned by this factory)
        callbacks: Functions executed at the initialize/persist/flush/handle_error points
        timeout_secure_margin_ms: Margin before the deadline to emit timeOut
    """

    def __init__(self, timeout_secure_margin_ms: int = DEFAULT_SECURE_MARGIN_MS):
        self.events = HandlerEventEmitter()
        self.callbacks = HandlerCallbacks()
        self.timeout_secure_margin_ms = timeout_secure_margin_ms

    @classmethod
    def from_config(cls, config: HandlerFactoryConfig) -> "AwsLambdaHandlerFactory":
        return cls(timeout_secure_margin_ms=config.TIMEOUT_SECURE_MARGIN_MS)

    def on(self, event: HandlerEventType, listener: Listener) -> Subscription:
        """Subscribe to a lifecycle event; detach() the result to unsubscribe."""
        return self.events.subscribe(event, listener)

    def build(self, handler: Handler) -> LambdaEntryPoint:
        """
        Args:
            handler: Your own handler, plain or coroutine function of (input, context)
        """
        return LambdaEntryPoint(self, handler)

    async def execute(
        self, handler: Handler, event: Any, context: LambdaContext
    ) -> InvocationOutcome:
        """
        Run one invocation through the whole lifecycle.

        Failures of `initialize` extensions propagate unchanged; every other
        failure is returned as a tagged outcome.
        """
        set_invocation(
            getattr(context, "aws_request_id", None), getattr(context, "function_name", None)
        )
        watchdog = DeadlineWatchdog(
            on_timeout=lambda: self.events.emit(HandlerEventType.TIME_OUT),
            secure_margin_ms=self.timeout_secure_margin_ms,
        )
        started = time.monotonic()
        try:
            await run_callbacks(self.callbacks.initialize, event, context)
            self.events.emit(HandlerEventType.CALLED, event, context)
            watchdog.start(context)
            try:
                response = await call_maybe_async(handler, event, context)
                await run_callbacks(self.callbacks.persist, response, context)
                self.events.emit(HandlerEventType.PERSISTED, response)
                await run_callbacks(self.callbacks.flush, response, context)
            except Exception as e:
                outcome = classify_failure(e)
                await self._handle_error(e, context)
                self.events.emit(HandlerEventType.ERROR, e)
                self.events.emit(HandlerEventType.FINISHED)
                self._log_failure(outcome, started)
                return outcome

            self.events.emit(HandlerEventType.SUCCEEDED, response)
            self.events.emit(HandlerEventType.FINISHED)
            logger.info(
                "Invocation succeeded",
                extra={"duration_ms": round((time.monotonic() - started) * 1000, 1)},
            )
            return Succeeded(response)
        finally:
            watchdog.stop()
            clear_invocation()

    async def _handle_error(self, error: Exception, context: LambdaContext) -> None:
        try:
            await run_callbacks(self.callbacks.handle_error, error, context)
        except Exception as callback_error:
            # The handler's error stays the outcome of the invocation.
            logger.error(
                f"handle_error extension failed: {callback_error}",
                exc_info=True,
                extra={"original_error": repr(error)},
            )

    def _log_failure(self, outcome: InvocationOutcome, started: float) -> None:
        duration_ms = round((time.monotonic() - started) * 1000, 1)
        if isinstance(outcome, ExpectedFailure):
            logger.info(
                f"Invocation rejected: {outcome.error}",
                extra={"duration_ms": duration_ms},
            )
            return
        logger.error(
            f"Invocation failed: {outcome.error}",
            exc_info=outcome.error,
            extra={"duration_ms": duration_ms, "error_type": type(outcome.error).__name__},
        )
