"""
Opt-in profiling for generation and animation hot paths.

Disabled by default; scripts turn it on with `profiler.enable()` and the
collected statistics are printed at interpreter exit.
"""

import time
from functools import wraps
from collections import defaultdict
from typing import Dict, List, Tuple
import atexit


class Profiler:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self.stats: Dict[str, Dict] = defaultdict(lambda: {
            'calls': 0,
            'total_time': 0.0,
            'max_time': 0.0,
        })
        self.enabled = False
        atexit.register(self.print_stats)

    def enable(self):
        self.enabled = True

    def disable(self):
        self.enabled = False

    def record(self, name: str, elapsed: float):
        if not self.enabled:
            return
        entry = self.stats[name]
        entry['calls'] += 1
        entry['total_time'] += elapsed
        entry['max_time'] = max(entry['max_time'], elapsed)

    def summary(self) -> List[Tuple[str, int, float, float, float]]:
        """(name, calls, total s, mean ms, max ms) rows, slowest total first."""
        rows = []
        for name, data in self.stats.items():
            calls = data['calls']
            mean_ms = data['total_time'] / calls * 1000 if calls else 0.0
            rows.append((name, calls, data['total_time'], mean_ms, data['max_time'] * 1000))
        return sorted(rows, key=lambda row: row[2], reverse=True)

    def print_stats(self):
        rows = self.summary()
        if not rows:
            return

        print("\n" + "=" * 80)
        print("BONSAI PROFILING RESULTS")
        print("=" * 80)
        print(f"{'Function':<35} {'Calls':>10} {'Total(s)':>10} {'Mean(ms)':>10} {'Max(ms)':>10}")
        print("-" * 80)
        for name, calls, total, mean_ms, max_ms in rows:
            print(f"{name:<35} {calls:>10} {total:>10.3f} {mean_ms:>10.3f} {max_ms:>10.3f}")
        print("=" * 80)

    def reset(self):
        self.stats.clear()


profiler = Profiler()


def profile(func):
    """Time every call of `func` while the profiler is enabled."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not profiler.enabled:
            return func(*args, **kwargs)
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            profiler.record(func.__qualname__, time.perf_counter() - start)
    return wrapper


class profile_block:
    """Context manager timing a named block, e.g. one render mode."""

    def __init__(self, name: str):
        self.name = name
        self.start = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *exc):
        profiler.record(self.name, time.perf_counter() - self.start)
        return False
