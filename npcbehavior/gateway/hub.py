"""Connection hub: registration, removal and fan-out of broadcasts to client connections."""

from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from typing import Any, Mapping

logger = logging.getLogger(__name__)

SEND_BUFFER_SIZE = 256
BROADCAST_BUFFER_SIZE = 256
ZONE_BROADCAST_BUFFER_SIZE = 64


class Connection:
    """Outbound side of one client: a bounded, closable message buffer."""

    def __init__(self, capacity: int = SEND_BUFFER_SIZE, zone_id: str = "") -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self.zone_id = zone_id
        self._buffer: deque[bytes] = deque()
        self._closed = False
        self._lock = threading.Lock()

    def offer(self, data: bytes) -> bool:
        """Queue data without blocking; False when the buffer is full."""
        with self._lock:
            if self._closed:
                raise ValueError("send on closed connection")
            if len(self._buffer) >= self.capacity:
                return False
            self._buffer.append(data)
            return True

    def close(self) -> None:
        """Close the buffer; data already queued can still be received."""
        with self._lock:
            if self._closed:
                raise ValueError("connection already closed")
            self._closed = True

    def receive_nowait(self) -> bytes:
        """Take the next queued message.

        Raises queue.Empty when nothing is queued on an open connection and
        EOFError once the connection is closed and drained.
        """
        with self._lock:
            if self._buffer:
                return self._buffer.popleft()
            if self._closed:
                raise EOFError("connection closed")
            raise queue.Empty


_STOP = object()


class Hub:
    """Tracks live connections and delivers broadcasts; run() processes requests in order."""

    def __init__(self) -> None:
        self._conns: dict[Connection, None] = {}
        self._inbox: queue.Queue[Any] = queue.Queue()
        self._lock = threading.Lock()
        self._count = 0
        self._pending_broadcasts = 0
        self._pending_zone_broadcasts = 0
        self._stopped = threading.Event()

    def run(self) -> None:
        """Process requests until stop() is called; a failing request is logged and skipped."""
        while not self._stopped.is_set():
            item = self._inbox.get()
            if item is _STOP:
                return
            self._run_once(*item)

    def stop(self) -> None:
        """Make run() return."""
        self._stopped.set()
        self._inbox.put(_STOP)

    def register(self, conn: Connection) -> None:
        """Add a connection."""
        self._inbox.put(("register", conn))

    def unregister(self, conn: Connection) -> None:
        """Remove a connection and close it; unknown connections are ignored."""
        self._inbox.put(("unregister", conn))

    def broadcast(self, data: bytes) -> None:
        """Send data to every connection; dropped when the broadcast buffer is full."""
        with self._lock:
            if self._pending_broadcasts >= BROADCAST_BUFFER_SIZE:
                logger.warning("hub.broadcast_full")
                return
            self._pending_broadcasts += 1
        self._inbox.put(("broadcast", data))

    def broadcast_by_zone(self, zone_data: Mapping[str, bytes]) -> None:
        """Send each connection the data for its zone; the "" key serves connections with no zone."""
        with self._lock:
            if self._pending_zone_broadcasts >= ZONE_BROADCAST_BUFFER_SIZE:
                logger.warning("hub.zone_broadcast_full")
                return
            self._pending_zone_broadcasts += 1
        self._inbox.put(("zone_broadcast", dict(zone_data)))

    def count(self) -> int:
        """Number of registered connections."""
        with self._lock:
            return self._count

    def _update_count(self) -> int:
        with self._lock:
            self._count = len(self._conns)
            return self._count

    def _drop(self, conn: Connection) -> None:
        del self._conns[conn]
        conn.close()
        clients = self._update_count()
        logger.warning("hub.slow_client clients=%d", clients)

    def _deliver(self, conn: Connection, data: bytes | None) -> None:
        if not data:
            return
        if not conn.offer(data):
            self._drop(conn)

    def _run_once(self, kind: str, payload: Any) -> None:
        try:
            if kind == "register":
                self._conns[payload] = None
                logger.info("hub.register clients=%d", self._update_count())
            elif kind == "unregister":
                if payload in self._conns:
                    del self._conns[payload]
                    payload.close()
                    logger.info("hub.unregister clients=%d", self._update_count())
            elif kind == "broadcast":
                with self._lock:
                    self._pending_broadcasts -= 1
                for conn in list(self._conns):
                    self._deliver(conn, payload)
            elif kind == "zone_broadcast":
                with self._lock:
                    self._pending_zone_broadcasts -= 1
                for conn in list(self._conns):
                    self._deliver(conn, payload.get(conn.zone_id or ""))
        except Exception:
            logger.exception("panic.recovered where=hub.run")