"""In-process publish/subscribe for GraphQL subscriptions."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Any

logger = logging.getLogger(__name__)


class EventBroker:
    """
    Fans each published payload out to the queues of current subscribers.
    At-most-once: nothing is kept for subscribers that join later.
    """

    def __init__(self) -> None:
        self._topics: dict[str, list[asyncio.Queue]] = {}

    def subscriber_count(self, topic: str) -> int:
        return len(self._topics.get(topic, []))

    def publish(self, topic: str, payload: Any) -> None:
        """Non-blocking; a topic without subscribers is a no-op."""
        queues = list(self._topics.get(topic, []))
        for queue in queues:
            queue.put_nowait(payload)
        logger.debug("Published %s to %d subscriber(s)", topic, len(queues))

    async def subscribe(self, topic: str) -> AsyncGenerator[Any, None]:
        """Yield payloads published to topic until the consumer stops iterating."""
        queue: asyncio.Queue = asyncio.Queue()
        self._topics.setdefault(topic, []).append(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            self._topics[topic].remove(queue)
            if not self._topics[topic]:
                del self._topics[topic]
