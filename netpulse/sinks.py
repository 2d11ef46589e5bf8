"""
Result Sinks - Delivery of completed probe results to consumers

Every completed probe is pushed individually through ResultSink.emit.
Delivery is best effort: a sink that raises (no listener, HTTP error, closed
UI) loses that one event. The failure is logged and never retried, and it is
never reported as an engine error.

Sinks are called one at a time on the scheduler's tick-loop thread, in
completion order. The next tick cannot start until every result of the
current batch has been emitted, so a slow sink stretches the batch and can
cause skipped ticks. Sinks that block on I/O should be kept short by their
timeout, or hand results off to their own worker.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

import requests

from .models import ProbeResult

logger = logging.getLogger(__name__)


class ResultSink(ABC):
    """Consumer of probe results, one call per completed probe"""

    @abstractmethod
    def emit(self, result: ProbeResult) -> None:
        """Receive one probe result. May raise; callers use deliver()."""
        raise NotImplementedError


def deliver(sink: ResultSink, result: ProbeResult) -> bool:
    """
    Push one result to a sink, swallowing any delivery failure.

    Returns:
        True if the sink accepted the result
    """
    try:
        sink.emit(result)
        return True
    except Exception as e:
        logger.debug(f"Dropped result for '{result.id}' from {type(sink).__name__}: {e}")
        return False


class CallbackSink(ResultSink):
    """Forwards results to a plain callable"""

    def __init__(self, callback: Callable[[ProbeResult], None]):
        self.callback = callback

    def emit(self, result: ProbeResult) -> None:
        self.callback(result)


class LoggingSink(ResultSink):
    """Writes one log line per result"""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logging.getLogger("netpulse.results")

    def emit(self, result: ProbeResult) -> None:
        if result.ok:
            self.log.info(f"[{result.id}] ok {result.latency_ms}ms")
        else:
            self.log.info(f"[{result.id}] FAIL {result.error} after {result.latency_ms}ms")


class WebhookSink(ResultSink):
    """
    POSTs each result as JSON to an HTTP endpoint.

    The POST runs on the tick-loop thread, so `timeout` also bounds how long
    one result can delay the rest of its batch.
    """

    def __init__(self, url: str, timeout: float = 5, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def emit(self, result: ProbeResult) -> None:
        response = self.session.post(
            self.url,
            json=result.to_dict(),
            timeout=self.timeout,
            headers={'User-Agent': 'netpulse/1.0'}
        )
        response.raise_for_status()


class MultiSink(ResultSink):
    """Fans each result out to several sinks; one failing child does not affect the rest"""

    def __init__(self, *sinks: ResultSink):
        self.sinks = list(sinks)

    def emit(self, result: ProbeResult) -> None:
        for sink in self.sinks:
            deliver(sink, result)


class StatsSink(ResultSink):
    """Feeds results into a RollingStats collector"""

    def __init__(self, stats):
        self.stats = stats

    def emit(self, result: ProbeResult) -> None:
        self.stats.add(result)
