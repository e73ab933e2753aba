"""Trigger/sink binding.

A trigger activation runs a small lifecycle: it writes a placeholder to the sink
(non-error), awaits the producer, then writes the resolved value in success
style or the failure message in error style. Activations are independent: two
fires of the same trigger produce two placeholder-then-result sequences and
share nothing but the sink reference.

This is a higher-order function over any zero-argument producer returning an
awaitable. The producer is called when the trigger fires, so anything it reads
synchronously (form values, files) is captured per activation; only the
awaitable it returns runs later, inside the task.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from core.domain.outcome import Failure, Outcome, Success, failure_from_exception
from core.interfaces.sink import DisplaySink

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[Any]]
Activation = Callable[[], "asyncio.Task[Outcome]"]


class TriggerBoard:
    """Registry of named triggers (form submissions, button clicks)."""

    def __init__(self) -> None:
        self._handlers: dict[str, Activation] = {}

    def register(self, trigger: str, handler: Activation) -> None:
        self._handlers[trigger] = handler

    def fire(self, trigger: str) -> "asyncio.Task[Outcome]":
        """Activate `trigger`; must be called from inside a running event loop."""

        try:
            handler = self._handlers[trigger]
        except KeyError:
            raise KeyError(f"unknown trigger: {trigger!r}") from None
        return handler()

    @property
    def triggers(self) -> list[str]:
        return list(self._handlers)

    def __contains__(self, trigger: object) -> bool:
        return trigger in self._handlers


def as_outcome(result: Any) -> Outcome:
    if isinstance(result, (Success, Failure)):
        return result
    return Success(result)


async def settle(sink: DisplaySink, target: str, pending: Awaitable[Any]) -> Outcome:
    """Await `pending` and push its final value (or error) into `sink`."""

    try:
        outcome = as_outcome(await pending)
    except Exception as exc:
        logger.warning("producer for %s raised %s", target, exc.__class__.__name__, exc_info=True)
        outcome = failure_from_exception(exc)

    if isinstance(outcome, Success):
        sink.show(target, outcome.payload, False)
    else:
        logger.info("operation for %s failed (%s): %s", target, outcome.kind.value, outcome.message)
        sink.show(target, outcome.message, True)
    return outcome


async def _reraise(exc: Exception) -> Any:
    raise exc


def bind(
    board: TriggerBoard,
    trigger: str,
    sink: DisplaySink,
    target: str,
    producer: Producer,
    *,
    placeholder: str = "Running...",
) -> None:
    """Wire `trigger` so each fire shows `placeholder` and then the producer's outcome."""

    def activate() -> "asyncio.Task[Outcome]":
        loop = asyncio.get_running_loop()
        sink.show(target, placeholder, False)
        try:
            pending = producer()
        except Exception as exc:
            pending = _reraise(exc)
        return loop.create_task(settle(sink, target, pending))

    board.register(trigger, activate)
