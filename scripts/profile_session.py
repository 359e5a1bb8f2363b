#!/usr/bin/env python3
"""
Memory and timing profile for long-running sessions.

Runs every simulation for a number of ticks, sampling process memory
between cycles to catch leaks from per-tick grid replacement.
"""

import gc
import os
import sys
import json
import time
import logging
from typing import Dict, List

import numpy as np
import psutil

from gridnotes.core.cell import Rect
from gridnotes.notes.sink import RecordingSink
from gridnotes.session.config import SessionConfig
from gridnotes.session.controller import Session
from gridnotes.simulations import SimulationKind

logger = logging.getLogger(__name__)


def measure_memory_mb() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def profile_simulation(kind: SimulationKind, cycles: int = 5, ticks_per_cycle: int = 200,
                       side: int = 32, seed: int = 0) -> Dict[str, object]:
    """Run ``cycles`` x ``ticks_per_cycle`` ticks and collect memory/timing samples."""
    sink = RecordingSink()
    session = Session(config=SessionConfig(side=side), simulation=kind, sink=sink,
                      bounds=Rect(0, 0, 640, 640), rng=np.random.default_rng(seed))

    memory_samples: List[float] = [measure_memory_mb()]
    tick_times: List[float] = []

    for cycle in range(cycles):
        for _ in range(ticks_per_cycle):
            start = time.perf_counter()
            session.advance()
            tick_times.append(time.perf_counter() - start)

        sink.clear()
        gc.collect()
        memory_samples.append(measure_memory_mb())
        logger.info(f"{kind.value} cycle {cycle}: {memory_samples[-1]:.1f}MB, "
                    f"alive={session.grid.count_alive()}")

    return {
        "simulation": kind.value,
        "ticks": cycles * ticks_per_cycle,
        "memory_start_mb": memory_samples[0],
        "memory_end_mb": memory_samples[-1],
        "memory_growth_mb": memory_samples[-1] - memory_samples[0],
        "mean_tick_ms": 1000 * float(np.mean(tick_times)),
        "max_tick_ms": 1000 * float(np.max(tick_times)),
    }


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Profile session memory and tick time")
    parser.add_argument("--cycles", type=int, default=5)
    parser.add_argument("--ticks", type=int, default=200, help="Ticks per cycle")
    parser.add_argument("--side", type=int, default=32)
    parser.add_argument("--budget-mb", type=float, default=50.0, help="Allowed memory growth")
    parser.add_argument("--output", default=None, help="Write results as JSON to this file")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    results = [profile_simulation(kind, args.cycles, args.ticks, args.side) for kind in SimulationKind]

    for result in results:
        print(f"{result['simulation']:>6}: {result['mean_tick_ms']:.2f}ms/tick "
              f"(max {result['max_tick_ms']:.2f}ms), growth {result['memory_growth_mb']:.1f}MB")

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(results, f, indent=2)
        logger.info(f"Profile written to: {args.output}")

    over_budget = [r for r in results if r["memory_growth_mb"] > args.budget_mb]
    if over_budget:
        print(f"✗ Memory budget exceeded by: {[r['simulation'] for r in over_budget]}")
        sys.exit(1)
    print("✓ Memory growth within budget")
