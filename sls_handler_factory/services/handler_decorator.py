"""
Lightweight alternative to the factory: wrap a handler with pre/post/error
callbacks without events or a watchdog.
"""

import functools
from typing import Any, Callable, Optional, Sequence

from ..core.callbacks import Callback, call_maybe_async, run_callbacks


def decorate_handler_with_callbacks(
    handler: Callable[[Any, Any], Any],
    pre: Optional[Sequence[Callback]] = None,
    post: Optional[Sequence[Callback]] = None,
    handle_error: Optional[Sequence[Callback]] = None,
) -> Callable[[Any, Any], Any]:
    """
    Returns an async handler running:
      pre(input, ctx) -> handler(input, ctx) -> post(response, ctx)

    On any failure, handle_error(err, ctx) runs and the error is re-raised.
    """
    pre_callbacks = list(pre or [])
    post_callbacks = list(post or [])
    error_callbacks = list(handle_error or [])

    @functools.wraps(handler)
    async def wrapper(event: Any, context: Any) -> Any:
        try:
            await run_callbacks(pre_callbacks, event, context)
            response = await call_maybe_async(handler, event, context)
            await run_callbacks(post_callbacks, response, context)
            return response
        except Exception as e:
            await run_callbacks(error_callbacks, e, context)
            raise

    return wrapper
