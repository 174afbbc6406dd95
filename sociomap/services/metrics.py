"""Thread-safe in-memory application metrics collector."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class MetricsCollector:
    """Request, generation and simulation counters plus latency samples.

    All mutation happens under one ``threading.Lock``.  The latency buffer
    is capped at ``_MAX_LATENCY_SAMPLES``; on overflow only the newest half
    is kept.
    """

    _MAX_LATENCY_SAMPLES: int = field(default=10_000, repr=False)

    total_requests: int = field(default=0, init=False)
    status_codes: dict[int, int] = field(default_factory=dict, init=False)
    generation_ok: dict[str, int] = field(default_factory=dict, init=False)
    generation_failures: dict[str, int] = field(default_factory=dict, init=False)
    simulations: int = field(default=0, init=False)

    _latencies: list[float] = field(default_factory=list, init=False, repr=False)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _start_time: float = field(default_factory=time.monotonic, init=False, repr=False)

    # -- Counters ----------------------------------------------------------

    def inc_request(self, status_code: int) -> None:
        with self._lock:
            self.total_requests += 1
            self.status_codes[status_code] = self.status_codes.get(status_code, 0) + 1

    def inc_generation(self, category: str, success: bool) -> None:
        with self._lock:
            bucket = self.generation_ok if success else self.generation_failures
            bucket[category] = bucket.get(category, 0) + 1

    def inc_simulation(self) -> None:
        with self._lock:
            self.simulations += 1

    # -- Latency -----------------------------------------------------------

    def record_latency(self, ms: float) -> None:
        with self._lock:
            self._latencies.append(ms)
            if len(self._latencies) > self._MAX_LATENCY_SAMPLES:
                half = self._MAX_LATENCY_SAMPLES // 2
                self._latencies = self._latencies[-half:]

    def _percentiles_unlocked(self) -> dict[str, float]:
        """p50/p90/p95/p99 of the buffered samples. Caller holds ``_lock``."""
        if not self._latencies:
            return {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
        s = sorted(self._latencies)
        n = len(s)
        return {
            "p50": round(s[int(n * 0.50)], 2),
            "p90": round(s[int(min(n * 0.90, n - 1))], 2),
            "p95": round(s[int(min(n * 0.95, n - 1))], 2),
            "p99": round(s[int(min(n * 0.99, n - 1))], 2),
        }

    # -- Snapshot / reset --------------------------------------------------

    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self._start_time, 2)

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "uptime_seconds": self.uptime_seconds(),
                "total_requests": self.total_requests,
                "status_codes": dict(self.status_codes),
                "generation": {
                    "ok": dict(self.generation_ok),
                    "failures": dict(self.generation_failures),
                },
                "simulations": self.simulations,
                "latency_ms": self._percentiles_unlocked(),
            }

    def reset(self) -> None:
        with self._lock:
            self.total_requests = 0
            self.status_codes.clear()
            self.generation_ok.clear()
            self.generation_failures.clear()
            self.simulations = 0
            self._latencies.clear()
            self._start_time = time.monotonic()


metrics = MetricsCollector()
