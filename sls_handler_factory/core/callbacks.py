"""
Extension points.

Every phase holds an ordered list of callables taking (value, context).
Callables of one phase run concurrently and the phase completes when all
of them finish; the first failure fails the phase. Phases themselves run
one after another.
"""

import asyncio
import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Union

Callback = Callable[..., Union[Any, Awaitable[Any]]]


async def call_maybe_async(func: Callable[..., Any], *args: Any) -> Any:
    """
    Call a plain or coroutine function and return its settled result.

    Plain functions run in a worker thread so a blocking call never stalls
    the event loop (and the timers scheduled on it, such as the watchdog).
    """
    if inspect.iscoroutinefunction(func):
        return await func(*args)

    result = await asyncio.to_thread(func, *args)
    if inspect.isawaitable(result):
        return await result
    return result


async def run_callbacks(callbacks: List[Callback], *args: Any) -> None:
    """Run callbacks concurrently with the same arguments and wait for all."""
    if not callbacks:
        return
    # Snapshot: registration is not expected while a phase runs.
    await asyncio.gather(*(call_maybe_async(cb, *args) for cb in list(callbacks)))


@dataclass
class HandlerCallbacks:
    """
    Functions executed at some execution points.
    - To add some action, append the callback to the list
    - Coroutine functions are accepted
    """

    initialize: List[Callback] = field(default_factory=list)
    persist: List[Callback] = field(default_factory=list)
    flush: List[Callback] = field(default_factory=list)
    handle_error: List[Callback] = field(default_factory=list)
