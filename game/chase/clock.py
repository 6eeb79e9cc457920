"""
Frame timing and deferred events for the chase simulation.

Timestamps are milliseconds from any monotonic source. Movement is scaled
by the *normalized delta*: elapsed time as a multiple of the nominal frame,
capped so a stalled or suspended host does not teleport entities.

Deferred callbacks (the pickup respawn) live in a priority queue ordered by
due time. Each event is tagged with the clock generation at the moment it
was scheduled; ``begin`` starts a new generation, and events from older
generations are dropped instead of being run.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


def normalized_delta(now: float, last: float, frame_ms: float, max_delta: float) -> float:
    """Elapsed frames between two timestamps, clamped to [0, max_delta]"""
    dt = (now - last) / frame_ms
    if dt < 0.0:
        return 0.0
    return min(dt, max_delta)


@dataclass(order=True)
class ScheduledEvent:
    due: float
    seq: int
    generation: int = field(compare=False)
    kind: str = field(compare=False, default="")
    callback: Optional[Callable[[], None]] = field(compare=False, default=None, repr=False)


class SimulationClock:
    """Owns tick timing, the single pending frame request and the delay queue"""

    def __init__(self, frame_ms: float = 16.6667, max_delta: float = 4.0):
        self.frame_ms = frame_ms
        self.max_delta = max_delta
        self.generation = 0
        self.last_time = 0.0
        self.frame_pending = False
        self.discarded = 0
        self._queue: List[ScheduledEvent] = []
        self._seq = itertools.count()

    def begin(self, now: float) -> int:
        """Start a new generation; everything already queued becomes stale."""
        self.generation += 1
        self.last_time = now
        self.frame_pending = True
        return self.generation

    def stop(self):
        self.frame_pending = False

    def request_frame(self):
        self.frame_pending = True

    def take_frame(self) -> bool:
        """Consume the pending frame request, if any."""
        if not self.frame_pending:
            return False
        self.frame_pending = False
        return True

    def delta(self, now: float) -> float:
        dt = normalized_delta(now, self.last_time, self.frame_ms, self.max_delta)
        self.last_time = now
        return dt

    def schedule(self, delay_ms: float, callback: Callable[[], None],
                 kind: str = "", now: Optional[float] = None) -> ScheduledEvent:
        start = self.last_time if now is None else now
        event = ScheduledEvent(
            due=start + delay_ms,
            seq=next(self._seq),
            generation=self.generation,
            kind=kind,
            callback=callback,
        )
        heapq.heappush(self._queue, event)
        return event

    def run_due(self, now: float) -> int:
        """Run every event due at ``now`` from the current generation. Returns how many ran."""
        fired = 0
        while self._queue and self._queue[0].due <= now:
            event = heapq.heappop(self._queue)
            if event.generation != self.generation:
                self.discarded += 1
                logger.debug("Dropping stale %s event from generation %d (current %d)",
                             event.kind or "deferred", event.generation, self.generation)
                continue
            event.callback()
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return len(self._queue)
