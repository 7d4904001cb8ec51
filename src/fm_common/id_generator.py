"""Time-ordered string IDs for offers (transaction log entries use BIGSERIAL).

Layout: 42 bits of milliseconds since a custom epoch, 10 bits of
per-millisecond sequence, 12 random bits. Sortable by creation time
within one process, collision-resistant across processes.
"""

import secrets
import threading
import time


class OrderedIdGenerator:
    _EPOCH_MS = 1_735_689_600_000  # 2025-01-01T00:00:00Z
    _SEQUENCE_BITS = 10
    _RANDOM_BITS = 12
    _MAX_SEQUENCE = (1 << _SEQUENCE_BITS) - 1

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix
        self._sequence = 0
        self._last_ms = -1
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            now_ms = int(time.time() * 1000)
            if now_ms <= self._last_ms:
                # Clock stood still or stepped back: keep counting on the last tick
                now_ms = self._last_ms
                self._sequence = (self._sequence + 1) & self._MAX_SEQUENCE
                if self._sequence == 0:
                    now_ms += 1
            else:
                self._sequence = 0
            self._last_ms = now_ms
            value = (
                ((now_ms - self._EPOCH_MS) << (self._SEQUENCE_BITS + self._RANDOM_BITS))
                | (self._sequence << self._RANDOM_BITS)
                | secrets.randbits(self._RANDOM_BITS)
            )
        return f"{self._prefix}{value}"


_offer_ids = OrderedIdGenerator(prefix="of_")


def generate_offer_id() -> str:
    return _offer_ids.next_id()
