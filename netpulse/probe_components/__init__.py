"""
Probe executors: TCP-connect and ICMP ping.
"""

from .tcp_probe import tcp_probe, DEFAULT_TIMEOUT_MS
from .ping_probe import ping_probe, parse_ping_latency, build_ping_command

__all__ = ["tcp_probe", "ping_probe", "parse_ping_latency", "build_ping_command", "DEFAULT_TIMEOUT_MS"]
