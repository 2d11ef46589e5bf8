"""
Probe Scheduler - Fixed-interval polling of the target registry

One long-lived thread drives the tick loop. Each tick snapshots the registry,
fans out one probe per target onto a bounded thread pool and streams every
result to the sink as soon as it completes.
"""

import logging
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from typing import List, Optional, Tuple

from .models import ProbeResult, Target, now_ms
from .probe import run_probe
from .probe_components import DEFAULT_TIMEOUT_MS
from .registry import TargetRegistry
from .sinks import ResultSink, deliver

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 5.0
DEFAULT_MAX_WORKERS = 20


class ProbeScheduler:
    """
    Periodic probe runner.

    The first tick fires as soon as the scheduler starts, then on a fixed
    cadence of `interval` seconds. A tick waits for its whole batch before the
    loop goes back to waiting, and cadence points that passed while a batch
    was running are skipped rather than replayed, so batches never overlap.
    At most `max_workers` probes run at the same time.
    """

    def __init__(self,
                 registry: TargetRegistry,
                 sink: ResultSink,
                 interval: float = DEFAULT_INTERVAL_SECONDS,
                 max_workers: int = DEFAULT_MAX_WORKERS,
                 timeout_ms: int = DEFAULT_TIMEOUT_MS):
        """
        Initialize the scheduler.

        Args:
            registry: Source of targets, read once per tick
            sink: Receives one result per completed probe
            interval: Tick period in seconds
            max_workers: Concurrent probe cap
            timeout_ms: TCP connect timeout passed to every probe
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.registry = registry
        self.sink = sink
        self.interval = interval
        self.max_workers = max_workers
        self.timeout_ms = timeout_ms

        self.ticks = 0
        self.skipped_ticks = 0

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """
        Start the tick loop on a background thread.

        Raises:
            RuntimeError: If a loop thread from an earlier start() is still alive
        """
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("scheduler already running")

        # One stop event per loop thread
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="netpulse-probe")
        self._thread = threading.Thread(
            target=self._loop, args=(stop_event,), name="netpulse-scheduler", daemon=True
        )
        self._thread.start()
        logger.info(f"Scheduler started: interval={self.interval}s max_workers={self.max_workers}")

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop the tick loop.

        The current batch is allowed to finish; in-flight probes are not
        cancelled and run to their own timeout. If the loop thread outlives
        `timeout`, it stays tracked and start() refuses until it has exited.
        """
        self._stop_event.set()

        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Scheduler thread still finishing a batch after stop()")
            else:
                self._thread = None

        executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)

        logger.info(f"Scheduler stopped after {self.ticks} ticks ({self.skipped_ticks} skipped)")

    def run_tick(self) -> int:
        """
        Run one batch: snapshot, fan out, stream results to the sink.

        Returns:
            Number of results delivered (one per target)
        """
        targets = self.registry.snapshot()
        self.ticks += 1

        if not targets:
            logger.debug("Tick with empty registry, nothing to probe")
            return 0

        logger.debug(f"Tick {self.ticks}: probing {len(targets)} targets")

        if self._executor is not None:
            return self._fan_out(self._executor, targets)

        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="netpulse-probe") as executor:
            return self._fan_out(executor, targets)

    def _fan_out(self, executor: Executor, targets: List[Target]) -> int:
        futures = {executor.submit(self._probe_one, target): (target, now_ms()) for target in targets}

        delivered = 0
        for future in as_completed(futures):
            target, submitted_at = futures[future]
            try:
                result = future.result()
            except Exception as e:
                logger.error(f"Probe unit for target '{target.id}' failed: {e}")
                result = ProbeResult.task_failed(target.id, submitted_at)

            deliver(self.sink, result)
            delivered += 1

        return delivered

    def _probe_one(self, target: Target) -> ProbeResult:
        result = run_probe(target.host, target.port, target.probe_type, self.timeout_ms)
        return result.with_id(target.id)

    def _next_deadline(self, deadline: float, now: float) -> Tuple[float, int]:
        """
        Next cadence point strictly after `now`.

        Returns:
            (next deadline, number of cadence points skipped)
        """
        missed = max(0, int((now - deadline) // self.interval))
        next_deadline = deadline + (missed + 1) * self.interval
        while next_deadline <= now:
            missed += 1
            next_deadline += self.interval
        return next_deadline, missed

    def _loop(self, stop_event: threading.Event) -> None:
        deadline = time.monotonic()

        while not stop_event.is_set():
            delay = deadline - time.monotonic()
            if delay > 0 and stop_event.wait(delay):
                break

            try:
                self.run_tick()
            except Exception:
                logger.exception("Unexpected error during scheduler tick")

            deadline, missed = self._next_deadline(deadline, time.monotonic())
            if missed:
                self.skipped_ticks += missed
                logger.debug(f"Batch overran the interval, skipped {missed} tick(s)")
