"""Span processor that queues ended spans and exports them in batches."""

from __future__ import annotations

import queue
import threading

from teletrace.export import SpanBatcher, SpanData
from teletrace.span_processor import SpanProcessor

DEFAULT_MAX_QUEUE_SIZE = 2048
DEFAULT_SCHEDULED_DELAY = 5.0
DEFAULT_MAX_EXPORT_BATCH_SIZE = 512


class BatchSpanProcessor(SpanProcessor):
    """Buffers ended spans and exports them from a background thread.

    Every ``scheduled_delay`` seconds the queue is drained and the sampled
    spans are handed to the exporter in batches of at most
    ``max_export_batch_size``. When the queue is full new spans are dropped,
    unless ``block_on_queue_full`` is set, in which case ``on_end`` waits.
    """

    def __init__(
        self,
        exporter: SpanBatcher | None,
        *,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
        scheduled_delay: float = DEFAULT_SCHEDULED_DELAY,
        max_export_batch_size: int = DEFAULT_MAX_EXPORT_BATCH_SIZE,
        block_on_queue_full: bool = False,
    ) -> None:
        if exporter is None:
            raise ValueError("exporter is None")
        self.exporter = exporter
        self.max_queue_size = max_queue_size
        self.scheduled_delay = scheduled_delay
        self.max_export_batch_size = max_export_batch_size
        self.block_on_queue_full = block_on_queue_full

        self._queue: queue.Queue[SpanData] = queue.Queue(maxsize=max_queue_size)
        self._dropped = 0
        self._started = 0
        self._counter_lock = threading.Lock()
        self._stop = threading.Event()
        self._shutdown_lock = threading.Lock()
        self._stopped = False
        self._worker = threading.Thread(
            target=self._run, name="teletrace-batch-processor", daemon=True
        )
        self._worker.start()

    @property
    def dropped(self) -> int:
        """Number of spans dropped because the queue was full or closed."""
        with self._counter_lock:
            return self._dropped

    @property
    def started(self) -> int:
        """Number of spans whose start this processor has seen."""
        with self._counter_lock:
            return self._started

    def on_start(self, span_data: SpanData) -> None:
        """Count the started span; spans are only queued when they end."""
        with self._counter_lock:
            self._started += 1

    def on_end(self, span_data: SpanData) -> None:
        """Queue the span for a later export."""
        if self._stopped:
            self._count_dropped()
            return
        if self.block_on_queue_full:
            self._queue.put(span_data)
            return
        try:
            self._queue.put_nowait(span_data)
        except queue.Full:
            self._count_dropped()

    def shutdown(self) -> None:
        """Flush the queue and wait for the export to finish; runs only once."""
        with self._shutdown_lock:
            if self._stopped:
                return
            self._stopped = True
            self._stop.set()
            self._worker.join()

    def __enter__(self) -> BatchSpanProcessor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _count_dropped(self) -> None:
        with self._counter_lock:
            self._dropped += 1

    def _run(self) -> None:
        while not self._stop.wait(self.scheduled_delay):
            self._process_queue()
        self._process_queue()

    def _process_queue(self) -> None:
        batch: list[SpanData] = []
        while True:
            try:
                span_data = self._queue.get_nowait()
            except queue.Empty:
                break
            if span_data is not None and span_data.span_context.is_sampled():
                batch.append(span_data)
            if len(batch) >= self.max_export_batch_size:
                self.exporter.export_spans(batch)
                batch = []
        if batch:
            self.exporter.export_spans(batch)