import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordhunt")


class StageTimer:
    """Per-request stage timings and result counts.

    Each finished stage is logged under the request label; log_summary()
    writes one line with everything collected.
    """

    def __init__(self, label: str):
        self.label = label
        self.timings: dict[str, float] = {}
        self.counts: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            # a stage entered twice accumulates
            elapsed_ms = (time.perf_counter() - t0) * 1000
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed_ms, 1)
            logger.debug("%s stage=%s elapsed=%.1fms", self.label, name, elapsed_ms)

    def count(self, name: str, value: int):
        self.counts[name] = value

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}

    def log_summary(self):
        stages = " ".join(f"{k}={v}ms" for k, v in self.timings.items())
        counts = " ".join(f"{k}={v}" for k, v in self.counts.items())
        logger.info("%s total=%.1fms %s %s", self.label, self.total_ms, stages, counts)
