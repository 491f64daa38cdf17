"""Instrumentation hooks wrapped around every storage service operation."""

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

NAMESPACE = "edge_storage"


@dataclass(frozen=True)
class Event:
    """A completed (or failed) instrumented operation."""

    name: str
    payload: dict[str, Any]
    duration_ms: float
    error: BaseException | None = None


Subscriber = Callable[[Event], None]


def log_event(event: Event) -> None:
    """Default subscriber: one structured log record per operation."""
    logger.debug(
        "Storage operation finished",
        extra={
            "event": event.name,
            "duration_ms": round(event.duration_ms, 3),
            "failed": event.error is not None,
            **{k: v for k, v in event.payload.items() if k != "exception"},
        },
    )


class Instrumenter:
    """
    Measures storage operations and publishes them to subscribers.

    Subscribers receive an :class:`Event` once the wrapped block exits. The
    payload handed to the block is the same dict that ends up on the event, so
    operations can annotate it (for instance ``payload["exist"] = True``).

    Example:
        instrumenter = Instrumenter()
        instrumenter.subscribe(lambda event: print(event.name, event.payload))

        with instrumenter.instrument("upload", key="a/b.png") as payload:
            ...
    """

    def __init__(
        self,
        namespace: str = NAMESPACE,
        subscribers: tuple[Subscriber, ...] = (log_event,),
    ):
        self._namespace = namespace
        self._subscribers = tuple(subscribers)

    @property
    def subscribers(self) -> tuple[Subscriber, ...]:
        return self._subscribers

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Registers a subscriber.

        Args:
            subscriber: Callable invoked with every finished event.

        Returns:
            A callable that removes the subscriber again.
        """
        self._subscribers = self._subscribers + (subscriber,)

        def unsubscribe() -> None:
            self.unsubscribe(subscriber)

        return unsubscribe

    def unsubscribe(self, subscriber: Subscriber) -> None:
        self._subscribers = tuple(s for s in self._subscribers if s is not subscriber)

    def event_name(self, operation: str) -> str:
        return f"service_{operation}.{self._namespace}"

    @contextmanager
    def instrument(self, operation: str, **payload: Any) -> Iterator[dict[str, Any]]:
        """
        Wraps a block as the named operation.

        Failures are recorded on the payload as ``exception`` and re-raised.

        Args:
            operation: Operation name, e.g. ``upload`` or ``delete_prefixed``.
            **payload: Identifying parameters of the call.

        Yields:
            The mutable payload dict.
        """
        error: BaseException | None = None
        started = time.perf_counter()
        try:
            yield payload
        except BaseException as e:
            error = e
            payload["exception"] = (type(e).__name__, str(e))
            raise
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            event = Event(self.event_name(operation), payload, duration_ms, error)
            for subscriber in self._subscribers:
                subscriber(event)
