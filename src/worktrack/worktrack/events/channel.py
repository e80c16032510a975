from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.constants import CHANGE_QUEUE_SIZE

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    kind: ChangeKind
    row_id: int

    def to_dict(self) -> dict:
        return {"table": self.table, "kind": self.kind.value, "id": self.row_id}


class Subscription:
    def __init__(self, channel: "ChangeChannel", table: str, *, maxsize: int = CHANGE_QUEUE_SIZE):
        self._channel = channel
        self.table = table
        self._queue: "queue.Queue[ChangeEvent]" = queue.Queue(maxsize=maxsize)
        self.closed = False

    def offer(self, event: ChangeEvent) -> bool:
        try:
            self._queue.put_nowait(event)
            return True
        except queue.Full:
            return False

    def get(self, timeout: Optional[float] = None) -> Optional[ChangeEvent]:
        """Next event, or None when nothing arrived within ``timeout`` seconds."""

        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._channel.unsubscribe(self)


class ChangeChannel:
    """In-process fan-out of row changes, keyed by table name."""

    def __init__(self, *, queue_size: int = CHANGE_QUEUE_SIZE):
        self._lock = threading.Lock()
        self._subscribers: dict[str, list[Subscription]] = {}
        self._queue_size = int(queue_size)

    def subscribe(self, table: str) -> Subscription:
        sub = Subscription(self, table, maxsize=self._queue_size)
        with self._lock:
            self._subscribers.setdefault(table, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subscribers.get(sub.table, [])
            if sub in subs:
                subs.remove(sub)

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers.get(table, []))

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            targets = list(self._subscribers.get(event.table, []))

        for sub in targets:
            if not sub.offer(event):
                logger.warning("Dropping %s event for %s#%s: subscriber queue full", event.kind.value, event.table, event.row_id)
