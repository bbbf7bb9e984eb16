# ============================================================================
# ClassProfiler - Two Sum Example
#
# Purpose: Compare a nested-loop search (low memory, slower) with a
#          single-pass hashmap (higher memory, faster)
# Inputs: List size (env SIZE, default 5000), seed 123
# Outputs: Performance and memory report on the example's sink
# Dependencies: mixins
# Usage: python -m ClassProfiler.examples.two_sum
#
# Changelog:
#   2026-10-03: Initial example
# ============================================================================

import os
import random
import sys
from typing import Dict, List, Optional, Tuple

from ClassProfiler.mixins import Profiled

DEFAULT_SIZE = 5000
DEFAULT_SEED = 123


class TwoSumExample(Profiled, track_performance=True, track_memory=True):
    """Find two indices whose values add up to a target."""

    def __init__(self, numbers: List[int], target: int):
        self.numbers = numbers
        self.target = target

    def brute_force(self) -> Optional[Tuple[int, int]]:
        numbers = self.numbers
        for i in range(len(numbers)):
            for j in range(i + 1, len(numbers)):
                if numbers[i] + numbers[j] == self.target:
                    return i, j
        return None

    def hashmap(self) -> Optional[Tuple[int, int]]:
        seen: Dict[int, int] = {}
        for index, number in enumerate(self.numbers):
            j = seen.get(self.target - number)
            if j is not None:
                return j, index
            seen[number] = index
        return None


def make_input(size: int = DEFAULT_SIZE, seed: int = DEFAULT_SEED) -> Tuple[List[int], int]:
    """Seeded random numbers in 1..10000 and a target that two distinct entries sum to."""
    rng = random.Random(seed)
    numbers = [rng.randint(1, 10_000) for _ in range(size)]
    if size < 2:
        return numbers, 0
    i, j = rng.sample(range(size), 2)
    return numbers, numbers[i] + numbers[j]


def run_two_sum(size: int = DEFAULT_SIZE, seed: int = DEFAULT_SEED) -> TwoSumExample:
    """Run both algorithms once on a fresh instance and return it."""
    numbers, target = make_input(size, seed)
    example = TwoSumExample(numbers, target)
    example.brute_force()
    example.hashmap()
    return example


def main() -> int:
    size = int(os.environ.get("SIZE", DEFAULT_SIZE))
    TwoSumExample.enable_profiler_logging_to_stdout()
    example = run_two_sum(size)

    print("=== Two Sum: brute_force (low memory, slower) vs hashmap (higher memory, faster) ===")
    print(f"Input SIZE={size}")
    example.profile_report()
    return 0


if __name__ == "__main__":
    sys.exit(main())
