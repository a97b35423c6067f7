"""Default generator of trace and span identifiers."""

from __future__ import annotations

import random
import secrets
import threading

from teletrace.core import IDGenerator

_MASK64 = (1 << 64) - 1


class DefaultIDGenerator(IDGenerator):
    """Generates span ids from a stepped sequence and trace ids from a seeded RNG."""

    def __init__(
        self,
        *,
        seed: int | None = None,
        trace_id_add: tuple[int, int] | None = None,
        next_span_id: int | None = None,
        span_id_inc: int | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._rand = random.Random(secrets.randbits(64) if seed is None else seed)
        if trace_id_add is None:
            trace_id_add = (secrets.randbits(64), secrets.randbits(64))
        self._trace_id_add = (trace_id_add[0] & _MASK64, trace_id_add[1] & _MASK64)
        self._next_span_id = (
            secrets.randbits(64) if next_span_id is None else next_span_id & _MASK64
        )
        inc = secrets.randbits(64) if span_id_inc is None else span_id_inc & _MASK64
        self._span_id_inc = inc | 1

    def new_span_id(self) -> int:
        """Return a non-zero span id from the sequence."""
        with self._lock:
            span_id = 0
            while span_id == 0:
                self._next_span_id = (self._next_span_id + self._span_id_inc) & _MASK64
                span_id = self._next_span_id
            return span_id

    def new_trace_id(self) -> int:
        """Return a 128-bit trace id built from two random halves."""
        with self._lock:
            high = (self._rand.getrandbits(64) + self._trace_id_add[0]) & _MASK64
            low = (self._rand.getrandbits(64) + self._trace_id_add[1]) & _MASK64
            return (high << 64) | low