#!/usr/bin/env python3
"""
sievecache Benchmarks
=====================

Workloads for measuring throughput and hit ratio:

- add:         random keys drawn from twice / four times the capacity
- get:         50% hits, 50% misses, misses are inserted
- churn:       70% add / 20% get / 10% delete with periodic insert bursts
- concurrent:  60% get / 30% add / 10% delete from several threads

Requires the ``bench`` extra (tqdm).

Usage:
    python examples/benchmark.py --ops 200000 --threads 8
"""

import argparse
import threading
import time
from typing import Callable, Dict, List

import numpy as np
from tqdm import tqdm

from sievecache import SieveCache
from sievecache.utils import get_logger, initialize_logging

logger = get_logger("sievecache.benchmark")


def _report(name: str, ops: int, elapsed: float, cache: SieveCache) -> Dict[str, float]:
    metrics = cache.get_metrics()
    result = {
        "ops": ops,
        "seconds": elapsed,
        "ops_per_sec": ops / elapsed if elapsed > 0 else 0.0,
        "hit_rate": metrics.hit_rate,
        "evictions": metrics.evictions,
    }
    logger.info(f"{name}: {result['ops_per_sec']:.0f} ops/s, hit rate {metrics.hit_rate:.2%}, "
                f"{metrics.evictions} evictions")
    return result


def bench_add(ops: int, capacity: int, rng: np.random.Generator) -> Dict[str, float]:
    """Random adds; even ops draw from 2x capacity, odd ops from 4x."""
    cache = SieveCache(capacity)
    keys = np.where(
        np.arange(ops) % 2 == 0,
        rng.integers(0, capacity * 2, size=ops),
        rng.integers(0, capacity * 4, size=ops),
    ).tolist()

    start = time.perf_counter()
    for key in tqdm(keys, desc="add", leave=False):
        cache.add(key, key)
    return _report("add", ops, time.perf_counter() - start, cache)


def bench_get(ops: int, capacity: int, rng: np.random.Generator) -> Dict[str, float]:
    """Half hits, half misses against a pre-filled cache; misses are inserted."""
    cache = SieveCache(capacity)
    for i in range(capacity):
        cache.add(i, i)
    cache.reset_metrics()

    hits = rng.integers(0, capacity, size=ops)
    misses = rng.integers(capacity, capacity * 2, size=ops)
    keys = np.where(np.arange(ops) % 2 == 0, hits, misses).tolist()

    start = time.perf_counter()
    for key in tqdm(keys, desc="get", leave=False):
        _, found = cache.get(key)
        if not found:
            cache.add(key, key)
    return _report("get", ops, time.perf_counter() - start, cache)


def bench_churn(ops: int, capacity: int) -> Dict[str, float]:
    """Mixed workload cycling through 2x capacity keys, with insert bursts."""
    cache = SieveCache(capacity)
    burst = max(1, capacity // 10)

    start = time.perf_counter()
    for i in tqdm(range(ops), desc="churn", leave=False):
        key = i % (capacity * 2)
        op = i % 10
        if op < 7:
            cache.add(key, i)
        elif op < 9:
            cache.get(key)
        else:
            cache.delete(key)

        if i > 0 and i % 10000 == 0:
            for j in range(burst):
                cache.add(i + j + capacity, i + j)
    return _report("churn", ops, time.perf_counter() - start, cache)


def bench_concurrent(ops: int, capacity: int, threads: int, seed: int) -> Dict[str, float]:
    """60% get, 30% add, 10% delete, split across worker threads."""
    cache = SieveCache(capacity)
    per_thread = ops // threads
    barrier = threading.Barrier(threads)

    def worker(worker_seed: int) -> None:
        rng = np.random.default_rng(worker_seed)
        choices = rng.integers(0, 10, size=per_thread).tolist()
        keys = rng.integers(0, capacity * 2, size=per_thread).tolist()
        barrier.wait()
        for op, key in zip(choices, keys):
            if op < 6:
                cache.get(key)
            elif op < 9:
                cache.add(key, key)
            else:
                cache.delete(key)

    workers: List[threading.Thread] = [
        threading.Thread(target=worker, args=(seed + n,), name=f"bench-worker-{n}")
        for n in range(threads)
    ]
    start = time.perf_counter()
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    return _report("concurrent", per_thread * threads, time.perf_counter() - start, cache)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run sievecache benchmarks")
    parser.add_argument("--ops", type=int, default=200_000)
    parser.add_argument("--capacity", type=int, default=8192)
    parser.add_argument("--threads", type=int, default=4)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    initialize_logging(log_level="INFO", log_format="text", force=True)
    rng = np.random.default_rng(args.seed)

    benches: Dict[str, Callable[[], Dict[str, float]]] = {
        "add": lambda: bench_add(args.ops, args.capacity, rng),
        "get": lambda: bench_get(args.ops, args.capacity, rng),
        "churn": lambda: bench_churn(args.ops, args.capacity),
        "concurrent": lambda: bench_concurrent(args.ops, args.capacity, args.threads, args.seed),
    }
    for name, run in benches.items():
        result = run()
        print(f"{name:>10}: {result['ops_per_sec']:>12,.0f} ops/s  "
              f"hit rate {result['hit_rate']:6.2%}  evictions {result['evictions']}")


if __name__ == "__main__":
    main()
