"""
Dispatcher — admits jobs, deduplicates them by file, runs them in a thread pool.

Architecture:
    ┌──────────────────────────────────────────────────────────────┐
    │                        Dispatcher                            │
    │                                                              │
    │  add() (caller thread)                                       │
    │    validate → acquire admission slot → put Admission ──┐     │
    │                                                        ▼     │
    │  Coordinating Thread                         ┌──────────────┐│
    │  ┌──────────────────────────────┐   get()    │ event queue  ││
    │  │ in_flight: set[file_path]    │◄───────────│ Admission /  ││
    │  │                              │            │ Completion   ││
    │  │ Admission:                   │            └──────────────┘│
    │  │   in flight? → drop          │                   ▲        │
    │  │   else → mark, submit()      │                   │        │
    │  │ Completion:                  │                   │        │
    │  │   unmark, on_complete(report)│                   │        │
    │  └──────────────┬───────────────┘                   │        │
    │                 │ submit()                          │        │
    │                 ▼                                   │        │
    │  ┌──────────────────────────────────────────┐       │        │
    │  │ ThreadPoolExecutor                       │ done callback  │
    │  │  engine.run(job) → JobReport             │───────┘        │
    │  └──────────────────────────────────────────┘                │
    └──────────────────────────────────────────────────────────────┘

Why one coordinating thread?
The in-flight set is read and written ONLY by that thread. Every admission
and every completion for a given file passes through the same serial point,
so "never two executions for one file" holds without any lock around the set.

Back-pressure:
At most `queue_size` admissions can be waiting for the coordinating thread.
When that many are pending, add() blocks until the thread takes one, so the
caller slows down instead of getting a queue-full error. Admitted jobs run
at most `pool_size` at a time; the rest wait in the executor's queue while
still counted as in flight, so deduplication is unaffected.

Completion callbacks run on the coordinating thread. on_complete must not
call add(): add() raises RuntimeError there instead of deadlocking the loop.

Duplicates:
If a file is already being processed, a second admission for it is dropped.
Its add() call already returned successfully; the dimensions it carried are
discarded. The drop is logged and counted in stats.dropped.
"""

import functools
import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from models.dimensions import ImageDimensions
from models.enums import VariantStatus
from models.job import Job, JobReport, VariantResult
from transforms.engine import TransformEngine
from validation.validator import validate

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 10


@dataclass(frozen=True)
class _Admission:
    job: Job


@dataclass(frozen=True)
class _Completion:
    file_path: str
    report: JobReport


_STOP = object()


@dataclass
class DispatcherStats:
    """Counters written only by the coordinating thread; safe to read anywhere."""
    admitted: int = 0
    dropped: int = 0
    completed: int = 0


class Dispatcher:

    def __init__(
        self,
        engine: TransformEngine,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        pool_size: int = 4,
        on_complete: Optional[Callable[[JobReport], None]] = None,
    ):
        if queue_size < 1:
            raise ValueError(f"queue_size must be at least 1, got {queue_size}")
        self._engine = engine
        self._on_complete = on_complete
        self._events: queue.Queue = queue.Queue()
        self._admission_slots = threading.BoundedSemaphore(queue_size)
        self._executor = ThreadPoolExecutor(
            max_workers=pool_size,
            thread_name_prefix="variant-worker",
        )
        self._in_flight: set[str] = set()
        self._thread: Optional[threading.Thread] = None
        self._stopped = False
        self.stats = DispatcherStats()

    def start(self) -> None:
        """Start the coordinating thread."""
        self._thread = threading.Thread(target=self._dispatch_loop, name="dispatcher", daemon=True)
        self._thread.start()
        logger.info("Dispatcher started")

    def stop(self) -> None:
        """
        Stop admitting, wait for running jobs, deliver their reports, then
        stop the coordinating thread.

        Order matters: the pool is drained before the stop signal is queued,
        so every completion a running job posts is ahead of the signal and
        reaches on_complete. Admissions not yet submitted are never started.
        """
        self._stopped = True
        self._executor.shutdown(wait=True)
        if self._thread is not None:
            self._events.put(_STOP)
            self._thread.join()
            self._thread = None
        logger.info("Dispatcher stopped")

    def add(
        self,
        buf: bytes,
        file_path: str,
        dimensions: Optional[ImageDimensions] = None,
        enforce_floor: bool = False,
    ) -> Job:
        """
        Validate an upload and queue it for processing.

        Validation runs right here on the caller's thread. Rendering happens
        later in the pool; its outcome is delivered to on_complete.

        Args:
            buf: raw bytes of the stored upload
            file_path: where the upload is stored, also the identity for deduplication
            dimensions: formats to render; None → no floor, no formats
            enforce_floor: reject images below dimensions.min_width/min_height

        Returns:
            the Job that was queued

        Raises:
            ValidationError: nothing is queued.
            RuntimeError: the dispatcher was stopped, or add() was called
                from on_complete (which runs on the coordinating thread).
        """
        if self._stopped:
            raise RuntimeError("dispatcher is stopped")
        if self._thread is not None and threading.current_thread() is self._thread:
            raise RuntimeError("add() cannot be called from the completion callback")

        job = validate(buf, file_path, dimensions, enforce_floor)

        # Blocks while queue_size admissions are already waiting (backpressure)
        self._admission_slots.acquire()
        self._events.put(_Admission(job))
        return job

    def join(self) -> None:
        """Block until every queued admission has been dropped or has completed."""
        self._events.join()

    def _dispatch_loop(self) -> None:
        """
        Serve events one at a time until the stop signal arrives.

        Task accounting for join(): an admitted job's event is marked done
        only when its completion is processed, so join() cannot return while
        the job is still rendering.
        """
        while True:
            event = self._events.get()

            if event is _STOP:
                self._events.task_done()
                return

            try:
                if isinstance(event, _Completion):
                    self._handle_completion(event)
                else:
                    self._handle_admission(event)
            except Exception as e:
                logger.error(f"Dispatch error: {e}", exc_info=True)

    def _handle_admission(self, event: _Admission) -> None:
        self._admission_slots.release()
        job = event.job

        if job.file_path in self._in_flight:
            self.stats.dropped += 1
            logger.debug(f"Dropping duplicate admission for {job.file_path}")
            self._events.task_done()
            return

        self._in_flight.add(job.file_path)
        self.stats.admitted += 1
        logger.debug(f"Dispatching {job.file_path} to thread pool")

        try:
            future: Future = self._executor.submit(self._engine.run, job)
        except RuntimeError as e:
            # Pool already shut down
            self._in_flight.discard(job.file_path)
            self._events.task_done()
            logger.error(f"Could not start {job.file_path}: {e}")
            return
        future.add_done_callback(functools.partial(self._on_job_done, job.file_path))

    def _handle_completion(self, event: _Completion) -> None:
        self._in_flight.discard(event.file_path)
        self.stats.completed += 1

        try:
            if self._on_complete is not None:
                self._on_complete(event.report)
        except Exception as e:
            logger.error(f"Completion callback error for {event.file_path}: {e}", exc_info=True)
        finally:
            # One for the completion event, one for the admission it closes
            self._events.task_done()
            self._events.task_done()

    def _on_job_done(self, file_path: str, future: Future) -> None:
        """
        Callback fired when a worker thread finishes a job.

        This runs in the worker thread, not the coordinating thread, so it
        only posts an event; the in-flight set is left to the loop.
        """
        exc = future.exception()
        if exc is None:
            report = future.result()
        else:
            logger.error(f"Unhandled worker exception for {file_path}: {exc}")
            report = JobReport(
                file_path=file_path,
                variants=[VariantResult(name="", status=VariantStatus.FAILED, error=str(exc))],
            )
        self._events.put(_Completion(file_path, report))
