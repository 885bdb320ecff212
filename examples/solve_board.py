"""Rearrange a crowded board with a single joker.

Demonstrates building a ``State`` from shorthand notation and running
the solver with a progress bar. The board below holds 19 tiles:

    Red:    1  4 12
    Blue:   1  4 12
    Yellow: 1  2  3
    Black:  1  1  2  3  4  4  6  8 12
    Joker

One full arrangement exists: sets of 1s, 4s and 12s, sequences y1-y3
and x1-x4, and x6 j x8 with the joker standing in for a black 7.
"""

import logging
import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import rummikub
import solver


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    state = rummikub.State.from_strings(
        "r1 r4 r12 b1 b4 b12 y1 y2 y3 x1 x1 x2 x3 x4 x4 x6 x8 x12 j",
    )

    print("=" * 60)
    print("Board rearrangement")
    print("=" * 60)
    print()
    print(state)

    result = solver.solve(state, show_progress=True)
    print()
    solver.print_solution(result)


if __name__ == "__main__":
    main()
