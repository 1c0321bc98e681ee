# timeline/loop.py
import math, logging
from typing import Callable, Optional

class LoopDriver:
    """Turns consecutive timestamps (seconds) into per-tick dt.

    The simulation never reads a clock; whoever owns the frame loop feeds
    timestamps here and passes the resulting dt on.
    """
    def __init__(self, max_dt: Optional[float] = None):
        if max_dt is not None and not (max_dt > 0):
            raise ValueError(f"max_dt must be positive or None, got {max_dt!r}")
        self.max_dt = max_dt
        self._last: Optional[float] = None
        self.clamped_ticks = 0

    def reset_clock(self):
        self._last = None

    def measure(self, now: float) -> float:
        if not math.isfinite(now):
            raise ValueError(f"timestamp must be finite, got {now!r}")
        prev, self._last = self._last, now
        if prev is None or now <= prev:
            return 0.0
        dt = now - prev
        if self.max_dt is not None and dt > self.max_dt:
            # 視窗被隱藏後回來時 dt 會很大
            logging.debug("dt %.3fs clamped to %.3fs", dt, self.max_dt)
            self.clamped_ticks += 1
            dt = self.max_dt
        return dt

    def tick(self, now: float, update: Callable[[float], None]) -> float:
        dt = self.measure(now)
        update(dt)
        return dt
