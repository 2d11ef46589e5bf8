"""
Netpulse Models - Target and probe result records

Targets are immutable value records held by the registry. Probe results are
constructed once per probe attempt and handed to the result sink.
"""

import time
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Dict, Any, Optional


class ProbeType(str, Enum):
    """Probe strategies understood by the engine"""
    TCP = "tcp"
    PING = "ping"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ProbeType":
        """
        Map a raw probe_type value to a strategy.

        Only the exact value "ping" selects the ICMP probe. Anything else
        (None, "", "PING", unknown strings) runs the TCP-connect probe.
        """
        if value == cls.PING.value:
            return cls.PING
        return cls.TCP


DEFAULT_PROBE_TYPE = ProbeType.TCP.value


def now_ms() -> int:
    """Milliseconds since the Unix epoch"""
    return int(time.time() * 1000)


def elapsed_ms(start: float) -> int:
    """Whole milliseconds since a time.monotonic() reading"""
    return max(0, int((time.monotonic() - start) * 1000))


@dataclass(frozen=True)
class Target:
    """A single monitored endpoint"""
    id: str
    name: str
    host: str
    port: int
    probe_type: str = DEFAULT_PROBE_TYPE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Target":
        """Build a target from a mapping, defaulting probe_type to tcp"""
        probe_type = data.get("probe_type")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            host=data["host"],
            port=data["port"],
            probe_type=probe_type if probe_type is not None else DEFAULT_PROBE_TYPE,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one probe attempt"""
    id: str
    ok: bool
    latency_ms: int
    error: Optional[str]
    timestamp: int

    @classmethod
    def success(cls, latency_ms: int, timestamp: int) -> "ProbeResult":
        return cls(id="", ok=True, latency_ms=latency_ms, error=None, timestamp=timestamp)

    @classmethod
    def failure(cls, error: str, latency_ms: int, timestamp: int) -> "ProbeResult":
        return cls(id="", ok=False, latency_ms=latency_ms, error=error, timestamp=timestamp)

    @classmethod
    def task_failed(cls, target_id: str = "", timestamp: int = 0) -> "ProbeResult":
        """Result for a probe unit that did not run to completion"""
        return cls(id=target_id, ok=False, latency_ms=0, error="task_failed", timestamp=timestamp)

    def with_id(self, target_id: str) -> "ProbeResult":
        return replace(self, id=target_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)
