"""Benchmark solver running time across random deals.

Deals random boards and hands from a shuffled full tile set and times
``solver.solve()`` on each. Collects outcome counts and timing
statistics (mean, median, max) to check how search cost grows with the
number of tiles in play.
"""

import pathlib
import statistics
import sys
import time

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent))

import rummikub
import solver

NUM_DEALS = 50
BOARD_SIZE = 9
HAND_SIZE = 3


def main() -> None:
    timings: list[float] = []
    outcomes = {outcome: 0 for outcome in solver.Outcome}

    for deal_idx in range(NUM_DEALS):
        seed = deal_idx * 7 + 1
        state = rummikub.deal_state(BOARD_SIZE, HAND_SIZE, seed=seed)

        start = time.perf_counter()
        result = solver.solve(state)
        timings.append(time.perf_counter() - start)
        outcomes[result.outcome] += 1

        if (deal_idx + 1) % 10 == 0:
            print(f"  Completed {deal_idx + 1}/{NUM_DEALS} deals...")

    print()
    print("=" * 60)
    print(
        f"SOLVER BENCHMARK ({NUM_DEALS} deals, "
        f"{BOARD_SIZE} board + {HAND_SIZE} hand tiles)"
    )
    print("=" * 60)

    print("\nOutcomes:")
    for outcome, count in outcomes.items():
        print(f"  {outcome.name:<10} {count:>4}  ({count / NUM_DEALS:.1%})")

    print("\nTiming:")
    print(f"  Mean:   {statistics.mean(timings) * 1000:.2f} ms")
    print(f"  Median: {statistics.median(timings) * 1000:.2f} ms")
    print(f"  Max:    {max(timings) * 1000:.2f} ms")
    print(f"  Total:  {sum(timings):.2f} s")


if __name__ == "__main__":
    main()
