#!/usr/bin/env python3
"""Benchmark map generation operations on large grids."""

from __future__ import annotations

import argparse
import json
import time
from collections.abc import Callable
from pathlib import Path

from procmap import Generator, SizeRange, banded

GRID_SIZES: tuple[tuple[int, int], ...] = (
    (100, 100),
    (250, 250),
    (500, 500),
    (1000, 1000),
)

ROOM_SIZE = SizeRange(width_range=(4, 20), height_range=(4, 20))
THREE_BANDS = banded([0.33, 0.66])

OPERATIONS: dict[str, Callable[[Generator], Generator]] = {
    "perlin": lambda generator: generator.spawn_perlin(THREE_BANDS),
    "rooms": lambda generator: generator.spawn_rooms(50, 100, ROOM_SIZE),
    "terrain": lambda generator: generator.spawn_terrain(
        1, generator.width * generator.height // 4
    ),
    "scatter": lambda generator: generator.spawn_repeated(1, 10_000),
}


class GenerationBenchmark:
    """Benchmark runner for the built-in generation operations."""

    def __init__(self, iterations: int, operations: list[str]) -> None:
        self.iterations = iterations
        self.operations = operations
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, operation: str, width: int, height: int) -> float:
        """Run one benchmark case and return average time in milliseconds."""
        elapsed_total = 0.0
        spawn = OPERATIONS[operation]

        for i in range(self.iterations):
            generator = Generator(width, height, seed=i)

            start = time.perf_counter()
            spawn(generator)
            elapsed_total += time.perf_counter() - start

        return (elapsed_total / self.iterations) * 1000.0

    def run(self) -> None:
        """Run every selected operation at every configured grid size."""
        print("Generation Benchmark")
        print("=" * 42)
        print(f"Iterations per case: {self.iterations}")
        print()
        print(f"{'Operation':>10} {'Size':>12} {'Time (ms)':>14}")
        print("-" * 42)

        for operation in self.operations:
            for width, height in GRID_SIZES:
                elapsed_ms = self._run_case(operation, width, height)

                case_key = f"{operation}:{width}x{height}"
                self.results[case_key] = {"ms": elapsed_ms}

                print(f"{operation:>10} {width}x{height:<7} {elapsed_ms:14.2f}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for case_key, current in self.results.items():
            if case_key not in baseline:
                continue

            old_ms = baseline[case_key].get("ms", 0.0)
            new_ms = current["ms"]
            if old_ms <= 0:
                continue

            delta_pct = ((new_ms - old_ms) / old_ms) * 100.0
            speed_ratio = old_ms / new_ms if new_ms > 0 else 0.0
            trend = "faster" if speed_ratio > 1.0 else "slower"

            print(
                f"{case_key:>20}: {new_ms:8.2f}ms "
                f"vs {old_ms:8.2f}ms | {speed_ratio:5.2f}x {trend} "
                f"({delta_pct:+6.1f}%)"
            )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark map generation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=3,
        help="Number of runs per case (default: 3)",
    )
    parser.add_argument(
        "--operation",
        action="append",
        choices=sorted(OPERATIONS),
        help="Operation to benchmark; repeat for several (default: perlin, rooms)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    args = parser.parse_args(argv)

    benchmark = GenerationBenchmark(
        iterations=args.iterations,
        operations=args.operation or ["perlin", "rooms"],
    )
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
