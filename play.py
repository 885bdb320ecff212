"""Interactive console for the Rummikub solver.

Build up a board and hand one tile at a time, then ask the solver for a
rearrangement.

Commands:
    s         solve the current board and hand
    bTILE     add TILE to the board (e.g., ``br5``, ``bj``)
    hTILE     add TILE to your hand (e.g., ``hx12``)
    q         quit
"""

import logging

import rummikub
import solver

# Toggle the tqdm progress bar while solving.
SHOW_PROGRESS = True

MENU = (
    "\n's' to solve\n"
    "Prefix 'b' to add a tile to the board\n"
    "Prefix 'h' to add a tile to your hand"
)


def handle_command(state: rummikub.State, command: str) -> tuple[str, bool]:
    """Apply one console command to ``state``.

    Args:
        state: The board and hand being edited. Modified in place by
            ``b`` and ``h`` commands.
        command: The raw input line.

    Returns:
        A tuple of (message, show_state). ``message`` is printed as-is
        (may be empty); ``show_state`` is True when the board and hand
        should be printed afterwards.
    """
    command = command.strip()
    if not command:
        return "Provide an input", False

    code, rest = command[0], command[1:]
    if code in ("b", "h"):
        try:
            tile = rummikub.parse_tile(rest)
        except ValueError as e:
            return str(e), True
        if code == "b":
            state.add_to_board(tile)
        else:
            state.add_to_hand(tile)
        return "", True
    if code == "s":
        result = solver.solve(state, show_progress=SHOW_PROGRESS)
        return f"{result.outcome.name}\n{result.format(color=True)}", True
    return "Invalid input", False


def main() -> None:
    state = rummikub.State()
    while True:
        print(MENU)
        try:
            line = input("> ")
        except EOFError:
            print()
            break
        if line.strip() == "q":
            break

        message, show_state = handle_command(state, line)
        if message:
            print(message)
        if show_state:
            print()
            print(state)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    main()
