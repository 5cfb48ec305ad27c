"""In-process metric registry rendered in Prometheus text format."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Mapping, Sequence

BUCKETS = [0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60]

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_:]")


def prometheus_name(name: str) -> str:
    """Turn ``metric-update.timer`` style names into Prometheus identifiers."""
    return _INVALID_NAME_CHARS.sub("_", name)


@dataclass(slots=True)
class TimerSnapshot:
    name: str
    count: int
    sum_seconds: float
    bucket_counts: Sequence[int]


@dataclass(slots=True)
class Timer:
    """Cumulative histogram of durations."""

    name: str
    buckets: Sequence[float] = field(default_factory=lambda: list(BUCKETS))
    _count: int = 0
    _sum: float = 0.0
    _bucket_counts: list[int] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        self._bucket_counts = [0] * len(self.buckets)

    def update(self, duration: timedelta | float) -> None:
        seconds = (
            duration.total_seconds()
            if isinstance(duration, timedelta)
            else float(duration)
        )
        seconds = max(0.0, seconds)
        with self._lock:
            self._count += 1
            self._sum += seconds
            for index, bound in enumerate(self.buckets):
                if seconds <= bound:
                    self._bucket_counts[index] += 1

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return TimerSnapshot(
                name=self.name,
                count=self._count,
                sum_seconds=self._sum,
                bucket_counts=list(self._bucket_counts),
            )

    @property
    def count(self) -> int:
        return self._count


class MetricRegistry:
    """Gauges and timers owned by one process."""

    def __init__(self) -> None:
        self._gauges: dict[str, int] = {}
        self._timers: dict[str, Timer] = {}
        self._lock = threading.Lock()

    def timer(self, name: str) -> Timer:
        with self._lock:
            timer = self._timers.get(name)
            if timer is None:
                timer = Timer(name=name)
                self._timers[name] = timer
            return timer

    def set_gauges(self, values: Mapping[str, int]) -> None:
        with self._lock:
            self._gauges.update({name: int(value) for name, value in values.items()})

    def gauges(self) -> dict[str, int]:
        with self._lock:
            return dict(self._gauges)

    def render(self) -> str:
        """Render all gauges and timers as Prometheus exposition text."""
        with self._lock:
            gauges = sorted(self._gauges.items())
            timers = [self._timers[name] for name in sorted(self._timers)]
        lines: list[str] = []
        for name, value in gauges:
            metric = prometheus_name(name)
            lines.append(f"# HELP {metric} Published calculation metric {name}.")
            lines.append(f"# TYPE {metric} gauge")
            lines.append(f"{metric} {value}")
        for timer in timers:
            lines.extend(_format_timer(timer.snapshot(), timer.buckets))
        return "\n".join(lines) + "\n"


def _format_timer(snapshot: TimerSnapshot, buckets: Sequence[float]) -> list[str]:
    metric = f"{prometheus_name(snapshot.name)}_seconds"
    lines = [
        f"# HELP {metric} Duration of {snapshot.name} in seconds.",
        f"# TYPE {metric} histogram",
    ]
    for bound, count in zip(buckets, snapshot.bucket_counts):
        lines.append(f'{metric}_bucket{{le="{_format_bound(bound)}"}} {count}')
    lines.append(f'{metric}_bucket{{le="+Inf"}} {snapshot.count}')
    lines.append(f"{metric}_sum {snapshot.sum_seconds:.6f}")
    lines.append(f"{metric}_count {snapshot.count}")
    return lines


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


__all__ = ["BUCKETS", "MetricRegistry", "Timer", "TimerSnapshot", "prometheus_name"]
