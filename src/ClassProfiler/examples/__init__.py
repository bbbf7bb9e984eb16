# ============================================================================
# ClassProfiler - Examples Package
#
# Purpose: Small algorithm pairs that show the profiler's reports
# Inputs: None
# Outputs: Example classes and runners
# Dependencies: None
# Usage: from ClassProfiler.examples import EXAMPLES
#
# Changelog:
#   2026-10-03: Initial examples (primes, two-sum)
# ============================================================================

from ClassProfiler.examples.primes import PrimesExample, run_primes
from ClassProfiler.examples.two_sum import TwoSumExample, run_two_sum

# CLI name -> runner
EXAMPLES = {
    "primes": run_primes,
    "two-sum": run_two_sum,
}

__all__ = ["EXAMPLES", "PrimesExample", "TwoSumExample", "run_primes", "run_two_sum"]
