# ============================================================================
# ClassProfiler - Primes Example
#
# Purpose: Compare trial division (low memory, slower) with the sieve of
#          Eratosthenes (higher memory, faster)
# Inputs: Upper limit N (env N, default 20000)
# Outputs: Performance and memory report on the example's sink
# Dependencies: mixins
# Usage: python -m ClassProfiler.examples.primes
#
# Changelog:
#   2026-10-03: Initial example
# ============================================================================

import math
import os
import sys
from typing import List

from ClassProfiler.mixins import Profiled

DEFAULT_LIMIT = 20000


class PrimesExample(Profiled, track_performance=True, track_memory=True):
    """Two ways to list the primes up to a limit."""

    def __init__(self, limit: int):
        self.limit = limit

    def trial_division(self) -> List[int]:
        primes: List[int] = []
        for candidate in range(2, self.limit + 1):
            root = math.isqrt(candidate)
            for p in primes:
                if p > root:
                    primes.append(candidate)
                    break
                if candidate % p == 0:
                    break
            else:
                primes.append(candidate)
        return primes

    def sieve_of_eratosthenes(self) -> List[int]:
        limit = self.limit
        if limit < 2:
            return []
        is_composite = [False] * (limit + 1)
        is_composite[0] = is_composite[1] = True
        p = 2
        while p * p <= limit:
            if not is_composite[p]:
                for multiple in range(p * p, limit + 1, p):
                    is_composite[multiple] = True
            p += 1
        return [i for i in range(2, limit + 1) if not is_composite[i]]


def run_primes(limit: int = DEFAULT_LIMIT) -> PrimesExample:
    """Run both algorithms once on a fresh instance and return it."""
    example = PrimesExample(limit)
    example.trial_division()
    example.sieve_of_eratosthenes()
    return example


def main() -> int:
    limit = int(os.environ.get("N", DEFAULT_LIMIT))
    PrimesExample.enable_profiler_logging_to_stdout()
    example = run_primes(limit)

    print("=== Primes: trial_division (low memory, slower) vs sieve_of_eratosthenes (higher memory, faster) ===")
    print(f"Input N={limit}")
    print()
    example.profile_report()
    return 0


if __name__ == "__main__":
    sys.exit(main())
