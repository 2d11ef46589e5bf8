"""
Ping Probe - ICMP echo through the system ping utility

Raw ICMP sockets need elevated privileges, so the probe shells out to the
platform's ping binary and parses the reported round-trip time.
"""

import logging
import math
import platform
import subprocess
import time
from typing import List, Optional

from ..models import ProbeResult, elapsed_ms, now_ms

logger = logging.getLogger(__name__)

# Upper bound on a single ping run; the utility's own -W/-t/-w is ~2 seconds
PING_GUARD_SECONDS = 10


def build_ping_command(host: str, system: Optional[str] = None) -> List[str]:
    """
    Build a one-shot ping command with a ~2 second reply timeout.

    Args:
        host: Hostname or IP literal
        system: platform.system() value, detected when omitted

    Returns:
        argv list for subprocess
    """
    system = (system or platform.system()).lower()

    if system == "windows":
        return ["ping", "-n", "1", "-w", "2000", host]
    if system == "darwin":
        return ["ping", "-c", "1", "-t", "2", host]
    # Linux / Android
    return ["ping", "-c", "1", "-W", "2", host]


def _leading_number(text: str) -> Optional[float]:
    # digits with at most one decimal point
    token = ""
    for ch in text:
        if ch.isdigit() or (ch == "." and "." not in token):
            token += ch
        else:
            break
    try:
        return float(token)
    except ValueError:
        return None


def _round_ms(value: float) -> int:
    return int(math.floor(value + 0.5))


def parse_ping_latency(output: str) -> Optional[int]:
    """
    Extract the reported round-trip time from ping output.

    Matches "time=12.3 ms", "time=5ms", "time=0.456 ms" and the sub-millisecond
    "time<1ms" form, case-insensitively. "time<" values are clamped to at
    least 1ms.

    Args:
        output: Captured stdout of the ping utility

    Returns:
        Latency in whole milliseconds, or None when no time token is present
    """
    for line in output.splitlines():
        lower = line.lower()

        pos = lower.find("time=")
        if pos != -1:
            value = _leading_number(lower[pos + 5:])
            if value is not None:
                return _round_ms(value)
            continue

        pos = lower.find("time<")
        if pos != -1:
            value = _leading_number(lower[pos + 5:])
            if value is not None:
                return max(1, _round_ms(value))
            return 1

    return None


def ping_probe(host: str) -> ProbeResult:
    """
    Send one ICMP echo request to host via the system ping binary.

    Args:
        host: Hostname or IP literal

    Returns:
        ProbeResult with an empty id
    """
    timestamp = now_ms()
    start = time.monotonic()
    cmd = build_ping_command(host)

    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=PING_GUARD_SECONDS,
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"ping {host} exceeded {PING_GUARD_SECONDS}s")
        return ProbeResult.failure(
            f"ping_failed: timed out after {PING_GUARD_SECONDS}s", elapsed_ms(start), timestamp
        )
    except OSError as e:
        logger.debug(f"ping could not be launched for {host}: {e}")
        return ProbeResult.failure(f"ping_unavailable: {e}", elapsed_ms(start), timestamp)

    elapsed = elapsed_ms(start)

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        logger.debug(f"ping {host} exited with {proc.returncode}: {stderr}")
        return ProbeResult.failure(f"ping_failed: {stderr}", elapsed, timestamp)

    latency = parse_ping_latency(proc.stdout or "")
    if latency is None:
        logger.debug(f"ping {host} succeeded without a time token, using {elapsed}ms")
        latency = elapsed

    return ProbeResult.success(latency, timestamp)
