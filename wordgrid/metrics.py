import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordgrid")


class SolveStats:
    """Stage timings (ms) and result counters for one board solve."""

    def __init__(self, board_label: str = ""):
        self.board_label = board_label
        self.timings: dict[str, float] = {}
        self.counts: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield self
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)
            logger.info("board=%s stage=%s elapsed=%.1fms", self.board_label, name, self.timings[name])

    def count(self, name: str, value: int):
        self.counts[name] = value

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}

    def log_summary(self):
        counters = " ".join(f"{k}={v}" for k, v in self.counts.items())
        logger.info("board=%s total=%.1fms %s", self.board_label, self.total_ms, counters)
