"""
Frame Scheduler - display-synchronized callback queue.

Hosts call tick() once per displayed frame (the dashboard main loop, or the
offline recorder). Work requested from inside a tick runs on the next tick,
the same way a browser animation-frame callback that re-requests itself does.
"""

import logging
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """Queue of one-shot frame callbacks keyed by request id."""

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_id = 1
        self.timestamp = 0.0
        self.ticks = 0

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule callback for the next tick. Returns an id for cancel_frame()."""
        request_id = self._next_id
        self._next_id += 1
        self._pending[request_id] = callback
        return request_id

    def cancel_frame(self, request_id: Optional[int]) -> bool:
        """Drop a pending callback. Unknown or already-run ids are ignored."""
        if request_id is None:
            return False
        return self._pending.pop(request_id, None) is not None

    @property
    def pending(self) -> int:
        return len(self._pending)

    def tick(self, timestamp: Optional[float] = None) -> int:
        """
        Run every callback that was pending when the tick began.

        A callback cancelled by an earlier callback in the same tick is skipped.
        Returns the number of callbacks run.
        """
        if timestamp is None:
            timestamp = self.timestamp + 1
        self.timestamp = timestamp
        self.ticks += 1

        batch = list(self._pending.keys())
        ran = 0
        for request_id in batch:
            callback = self._pending.pop(request_id, None)
            if callback is None:
                continue
            callback(timestamp)
            ran += 1
        return ran
