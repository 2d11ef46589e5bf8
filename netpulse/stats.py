"""
Rolling Statistics - Per-target success rate and latency over a time window

Results are kept per target id for a rolling window (five minutes by default)
keyed on each result's timestamp. Averages and percentiles only consider
successful probes.
"""

import math
import threading
from collections import defaultdict, deque
from dataclasses import dataclass, asdict
from typing import Deque, Dict, Any, List, Optional, Sequence

from .models import ProbeResult, now_ms

DEFAULT_WINDOW_MS = 5 * 60 * 1000


def quantile(values: Sequence[float], q: float) -> Optional[float]:
    """
    Linear-interpolated quantile.

    Args:
        values: Sample values, any order
        q: Quantile in [0, 1]

    Returns:
        The interpolated value, or None for an empty sample
    """
    if not values:
        return None
    ordered = sorted(values)
    pos = (len(ordered) - 1) * q
    base = int(math.floor(pos))
    rest = pos - base
    if base + 1 < len(ordered):
        return ordered[base] + rest * (ordered[base + 1] - ordered[base])
    return float(ordered[base])


@dataclass
class TargetStats:
    """Summary of one target's results inside the window"""
    id: str
    count: int
    success_rate: Optional[float]
    average: Optional[float]
    p90: Optional[float]
    last: Optional[ProbeResult]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class RollingStats:
    """Thread-safe rolling window of probe results"""

    def __init__(self, window_ms: int = DEFAULT_WINDOW_MS):
        self.window_ms = window_ms
        self._lock = threading.Lock()
        self._results: Dict[str, Deque[ProbeResult]] = defaultdict(deque)

    def add(self, result: ProbeResult, now: Optional[int] = None) -> None:
        """Record a result and prune that target's entries older than the window"""
        cutoff = (now if now is not None else now_ms()) - self.window_ms
        with self._lock:
            entries = self._results[result.id]
            entries.append(result)
            kept = [r for r in entries if r.timestamp >= cutoff]
            if len(kept) != len(entries):
                self._results[result.id] = deque(kept)

    def clear(self, target_id: Optional[str] = None) -> None:
        """Forget results for one target, or for all targets"""
        with self._lock:
            if target_id is None:
                self._results.clear()
            else:
                self._results.pop(target_id, None)

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._results)

    def summary(self, target_id: str) -> TargetStats:
        """Compute success rate, average and p90 latency for one target"""
        with self._lock:
            results = list(self._results.get(target_id, ()))

        if not results:
            return TargetStats(id=target_id, count=0, success_rate=None, average=None, p90=None, last=None)

        latencies = [r.latency_ms for r in results if r.ok]
        return TargetStats(
            id=target_id,
            count=len(results),
            success_rate=len(latencies) / len(results),
            average=(sum(latencies) / len(latencies)) if latencies else None,
            p90=quantile(latencies, 0.90),
            last=results[-1],
        )
