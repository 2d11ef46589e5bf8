"""
Netpulse Probe - Strategy dispatch and the on-demand probe entry point
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .models import ProbeResult, ProbeType
from .probe_components import tcp_probe, ping_probe, DEFAULT_TIMEOUT_MS

logger = logging.getLogger(__name__)


def run_probe(host: str, port: int, probe_type: Optional[str] = None,
              timeout_ms: int = DEFAULT_TIMEOUT_MS) -> ProbeResult:
    """
    Run one probe with the executor matching probe_type.

    "ping" selects the ICMP probe; anything else, including None and unknown
    values, selects the TCP-connect probe.
    """
    if ProbeType.parse(probe_type) is ProbeType.PING:
        return ping_probe(host)
    return tcp_probe(host, port, timeout_ms)


def probe_target(host: str, port: int, probe_type: Optional[str] = None,
                 timeout_ms: int = DEFAULT_TIMEOUT_MS) -> ProbeResult:
    """
    Convenience function for an ad-hoc probe outside the periodic cadence.

    The probe runs on its own worker thread and the result is returned to the
    caller. The target registry is neither read nor written.

    Args:
        host: Hostname or IP literal
        port: TCP port, ignored for ping
        probe_type: "tcp" (default) or "ping"
        timeout_ms: TCP connect timeout in milliseconds

    Returns:
        ProbeResult with an empty id; error="task_failed" if the worker died
    """
    logger.debug(f"probe_target called for {host}:{port} type={probe_type} timeout={timeout_ms}ms")

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="netpulse-probe") as executor:
        future = executor.submit(run_probe, host, port, probe_type, timeout_ms)
        try:
            return future.result()
        except Exception as e:
            logger.error(f"On-demand probe of {host}:{port} failed to complete: {e}")
            return ProbeResult.task_failed()
