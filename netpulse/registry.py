"""
Target Registry - Concurrency-safe store of the monitored target set

The registry owns an ordered, immutable sequence of targets. Writers swap the
whole sequence; readers get their own copy. The lock only guards the reference
swap and the copy, never any I/O.
"""

import logging
import threading
from collections import Counter
from typing import Iterable, List, Tuple

from .models import Target

logger = logging.getLogger(__name__)


class TargetRegistry:
    """Holds the current target list for the scheduler"""

    def __init__(self, targets: Iterable[Target] = ()):
        self._lock = threading.Lock()
        self._targets: Tuple[Target, ...] = tuple(targets)

    def replace_all(self, targets: Iterable[Target]) -> None:
        """
        Atomically replace the stored target sequence.

        No validation is done here: empty hosts, port 0 or unknown probe types
        are stored as-is and surface later as probe failures. Duplicate ids are
        accepted too; results for them cannot be told apart by the sink.

        Args:
            targets: Full replacement sequence
        """
        new_targets = tuple(targets)

        duplicates = [tid for tid, n in Counter(t.id for t in new_targets).items() if n > 1]
        if duplicates:
            logger.debug(f"Registry received duplicate target ids: {duplicates}")

        with self._lock:
            self._targets = new_targets

        logger.debug(f"Registry now holds {len(new_targets)} targets")

    def snapshot(self) -> List[Target]:
        """
        Return a copy of the current target sequence.

        Targets are frozen records, so copying the container is enough to keep
        callers away from internal storage.
        """
        with self._lock:
            return list(self._targets)

    def __len__(self) -> int:
        with self._lock:
            return len(self._targets)
