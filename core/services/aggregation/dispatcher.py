from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from time import monotonic

from core.events.domain_events import DomainEvents, domain_events
from core.events.models import InvoiceWriteEvent
from core.services.aggregation.models import RecomputationOutcome
from core.services.aggregation.trigger import InvoiceAggregationTrigger

logger = logging.getLogger(__name__)


class InvoiceWriteDispatcher:
    """
    Subscribes the aggregation trigger to ``invoice_written`` notifications.

    Each notification becomes one independent recomputation on a worker
    thread. Recomputations for different projects run in parallel; two for
    the same project may overlap and the last write wins, which is safe
    because each one derives the full total on its own. With
    ``synchronous=True`` the trigger runs inline in the emitting thread.
    """

    def __init__(
        self,
        trigger: InvoiceAggregationTrigger,
        *,
        events: DomainEvents | None = None,
        max_workers: int = 4,
        synchronous: bool = False,
    ):
        if max_workers <= 0:
            raise ValueError("max_workers must be positive")
        self._trigger = trigger
        self._events: DomainEvents = events or domain_events
        self._synchronous = synchronous
        self._max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._pending: set[Future] = set()
        self._lock = threading.RLock()
        self._started = False
        self.submitted = 0
        self.completed = 0

    @property
    def synchronous(self) -> bool:
        return self._synchronous

    @property
    def is_running(self) -> bool:
        return self._started

    def start(self) -> "InvoiceWriteDispatcher":
        with self._lock:
            if self._started:
                return self
            if not self._synchronous and self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="invoice-aggregation",
                )
            self._events.invoice_written.connect(self.submit)
            self._started = True
        logger.info(
            "Invoice aggregation dispatcher started (%s)",
            "inline" if self._synchronous else f"{self._max_workers} workers",
        )
        return self

    def stop(self) -> None:
        with self._lock:
            self._events.invoice_written.disconnect(self.submit)
            self._started = False

    def submit(self, event: InvoiceWriteEvent) -> Future:
        with self._lock:
            self.submitted += 1
            if self._synchronous or self._executor is None:
                future: Future = Future()
                try:
                    future.set_result(self._run(event))
                except Exception as exc:
                    future.set_exception(exc)
                    self._on_done(future)
                return future
            future = self._executor.submit(self._run, event)
            self._pending.add(future)
        future.add_done_callback(self._on_done)
        return future

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until every submitted recomputation has finished."""
        deadline = None if timeout is None else monotonic() + timeout
        while True:
            with self._lock:
                pending = set(self._pending)
            if not pending:
                return True
            remaining = None if deadline is None else deadline - monotonic()
            if remaining is not None and remaining <= 0:
                return False
            wait(pending, timeout=remaining, return_when=FIRST_COMPLETED)

    def shutdown(self, wait: bool = True) -> None:
        self.stop()
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)
        logger.info("Invoice aggregation dispatcher stopped")

    def _run(self, event: InvoiceWriteEvent) -> list[RecomputationOutcome]:
        outcomes = self._trigger.handle(event)
        with self._lock:
            self.completed += 1
        return outcomes

    def _on_done(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Invoice aggregation worker crashed", exc_info=exc)


__all__ = ["InvoiceWriteDispatcher"]
