"""
Live update fan-out.

Services publish domain events after a successful commit. The hub hands each
event to every subscribed viewer queue; the WebSocket route drains the queue.
Publishing never raises into the caller.
"""
import asyncio
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _jsonable(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: value.isoformat() if isinstance(value, (datetime, date)) else value
        for key, value in payload.items()
    }


class Notifier:
    """Side channel for domain events."""

    def publish(self, event: str, payload: Dict[str, Any]) -> None:
        raise NotImplementedError


class LiveUpdateHub(Notifier):
    """Broadcasts events to every connected viewer.

    Each viewer gets a queue of at most max_pending events. A viewer that falls
    that far behind is dropped: its queue is cleared and receives a single
    None, which tells the WebSocket route to close the connection.
    """

    def __init__(self, max_pending: int = 100) -> None:
        self.max_pending = max_pending
        self._subscribers: List[Tuple[asyncio.AbstractEventLoop, asyncio.Queue]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> asyncio.Queue:
        """Register a queue on the running event loop. Must be called from a coroutine."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.max_pending)
        self._subscribers.append((asyncio.get_running_loop(), queue))
        logger.info("Viewer subscribed (%d connected)", len(self._subscribers))
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers = [(loop, q) for loop, q in self._subscribers if q is not queue]
        logger.info("Viewer unsubscribed (%d connected)", len(self._subscribers))

    def publish(self, event: str, payload: Dict[str, Any]) -> None:
        message = {"event": event, "data": _jsonable(payload)}
        for loop, queue in list(self._subscribers):
            try:
                # Routes run in a worker thread; hand off to the viewer's loop.
                loop.call_soon_threadsafe(self._deliver, queue, message)
            except RuntimeError:
                logger.warning("Dropping viewer on closed event loop")
                self.unsubscribe(queue)

    def _deliver(self, queue: asyncio.Queue, message: Dict[str, Any]) -> None:
        try:
            queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Dropping viewer with %d undelivered events", queue.qsize())
            self.unsubscribe(queue)
            while not queue.empty():
                queue.get_nowait()
            queue.put_nowait(None)


hub = LiveUpdateHub()


def get_notifier() -> Notifier:
    """FastAPI dependency; overridden in tests."""
    return hub


def notify(notifier: Optional[Notifier], event: str, payload: Dict[str, Any]) -> None:
    """Publish after commit. Failures are logged and never reach the caller."""
    if notifier is None:
        return
    try:
        notifier.publish(event, payload)
    except Exception:
        logger.exception("Failed to publish %s event", event)
