"""
TCP Probe - Socket-level reachability and connect latency

Resolves the target to a single address and times one TCP handshake.
"""

import logging
import socket
import time

from ..models import ProbeResult, elapsed_ms, now_ms

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 2000


def tcp_probe(host: str, port: int, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> ProbeResult:
    """
    Probe host:port with a single TCP connect.

    Only the first address returned by resolution is tried. The probe never
    retries and never raises; every failure is reported in the result.

    Args:
        host: Hostname or IP literal
        port: TCP port (0-65535)
        timeout_ms: Connect timeout in milliseconds

    Returns:
        ProbeResult with an empty id
    """
    timestamp = now_ms()
    start = time.monotonic()

    if not 0 <= port <= 65535:
        logger.debug(f"Refusing to resolve {host}:{port}, port out of range")
        return ProbeResult.failure(f"dns_error: port out of range: {port}", elapsed_ms(start), timestamp)

    try:
        addresses = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (OSError, UnicodeError, OverflowError) as e:
        logger.debug(f"Resolution of {host}:{port} failed: {e}")
        return ProbeResult.failure(f"dns_error: {e}", elapsed_ms(start), timestamp)

    if not addresses:
        logger.debug(f"Resolution of {host}:{port} returned no addresses")
        return ProbeResult.failure("dns_failed", elapsed_ms(start), timestamp)

    family, socktype, proto, _, sockaddr = addresses[0]

    try:
        with socket.socket(family, socktype, proto) as sock:
            sock.settimeout(timeout_ms / 1000.0)
            sock.connect(sockaddr)
    except OSError as e:
        latency = elapsed_ms(start)
        logger.debug(f"TCP connect to {host}:{port} failed after {latency}ms: {e}")
        return ProbeResult.failure(str(e), latency, timestamp)

    latency = elapsed_ms(start)
    logger.debug(f"TCP connect to {host}:{port} succeeded in {latency}ms")
    return ProbeResult.success(latency, timestamp)
