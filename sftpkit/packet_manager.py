"""Keeps responses in the order their requests arrived."""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderedPacket:
    """A request or response tagged with the arrival order of its request."""

    packet: Any
    order_id: int


class PacketManager:
    """Sends responses in the order their requests were registered.

    Requests are registered with incoming_packet; responses with
    ready_packet. A response is handed to ``sender`` only once every
    response to an earlier request has been sent.
    """

    def __init__(self, sender: Callable[[Any], object]) -> None:
        self._sender = sender
        self._lock = threading.RLock()
        self._idle = threading.Condition(self._lock)
        self._incoming: list[tuple[int, int, OrderedPacket]] = []
        self._outgoing: list[tuple[int, int, OrderedPacket]] = []
        self._sequence = itertools.count()
        self._working = 0
        self._packet_count = 0
        self._closed = False

    def new_order_id(self) -> int:
        """Allocate the next order id."""
        with self._lock:
            self._packet_count = (self._packet_count + 1) & 0xFFFFFFFF
            return self._packet_count

    def next_order_id(self) -> int:
        """The order id new_order_id will return next, without allocating it."""
        with self._lock:
            return (self._packet_count + 1) & 0xFFFFFFFF

    def incoming_packet(self, packet: OrderedPacket) -> None:
        """Register a request whose response must be awaited."""
        with self._lock:
            if self._closed:
                raise RuntimeError("packet manager is closed")
            self._working += 1
            _log.debug("incoming oid: %s", packet.order_id)
            heapq.heappush(self._incoming, (packet.order_id, next(self._sequence), packet))
            self._send_ready()

    def ready_packet(self, packet: OrderedPacket) -> None:
        """Register a response; send it and any that were waiting on it."""
        with self._lock:
            if self._working == 0:
                raise RuntimeError("response without an outstanding request")
            _log.debug("outgoing oid: %s", packet.order_id)
            heapq.heappush(self._outgoing, (packet.order_id, next(self._sequence), packet))
            self._working -= 1
            self._send_ready()
            if self._working == 0:
                self._idle.notify_all()

    def close(self) -> None:
        """Wait until every registered request has its response, then stop."""
        with self._lock:
            while self._working:
                self._idle.wait()
            self._closed = True

    def _send_ready(self) -> None:
        while self._incoming and self._outgoing:
            if self._incoming[0][0] != self._outgoing[0][0]:
                break
            heapq.heappop(self._incoming)
            _, _, out = heapq.heappop(self._outgoing)
            _log.debug("sending oid: %s", out.order_id)
            self._sender(out.packet)