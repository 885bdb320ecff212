"""Rearrangement solver for Rummikub.

Decides whether the tiles on the board plus the tiles in a player's
hand can be rearranged into valid runs: sets of one number in distinct
colours, or consecutive sequences in one colour.

Architecture:
    Run.join() answers "can this tile extend this run?" and returns up
    to two alternative successor runs. solve_state() explores every way
    to grow existing runs or open new ones by depth-first backtracking,
    pruning states it has already visited, and keeps the best state by
    outcome (solved > completed > neither).
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Iterator

import tqdm

import rummikub
from rummikub import Colour, Tile

logger = logging.getLogger(__name__)

_C = rummikub._Colors

# A Number run holds at most one tile per colour.
MAX_SET_SIZE = len(Colour)

# Runs shorter than this may not remain in a finished arrangement.
MIN_RUN_LENGTH = 3

# Source queue tags for SolvingState.unused_tiles().
BOARD = "board"
HAND = "hand"


# =============================================================================
# Run Kinds
# =============================================================================

@dataclasses.dataclass(frozen=True)
class NumberKind:
    """A set: every tile shows ``number``, colours pairwise distinct.

    Attributes:
        number: The shared number of the set.
    """
    number: int

    def describe(self) -> str:
        return f"Number({self.number})"


@dataclasses.dataclass(frozen=True)
class ColourKind:
    """A sequence of consecutive numbers ``low..high`` in one colour.

    Jokers may stand in anywhere in the sequence, including both ends,
    so ``high - low + 1`` always equals the run length.

    Attributes:
        colour: The colour shared by every non-joker tile.
        low: Number occupied by the front tile.
        high: Number occupied by the back tile.
    """
    colour: Colour
    low: int
    high: int

    def describe(self) -> str:
        return f"Colour({self.colour.name}, {self.low}, {self.high})"


@dataclasses.dataclass(frozen=True)
class UnknownKind:
    """Jokers plus at most one real tile: set or sequence is still open."""

    def describe(self) -> str:
        return "Unknown"


RunKind = NumberKind | ColourKind | UnknownKind

UNKNOWN = UnknownKind()


# =============================================================================
# Run
# =============================================================================

# Result of Run.join(): up to two alternative successor runs.
JoinResult = tuple["Run | None", "Run | None"]

_NO_JOIN: JoinResult = (None, None)


def _branches(first: Run | None, second: Run | None) -> JoinResult:
    """Pack successor runs so a single result is always in front."""
    if first is None:
        return (second, None)
    return (first, second)


@dataclasses.dataclass(frozen=True)
class Run:
    """An in-progress or finished set/sequence of tiles.

    Runs are immutable: join() returns new runs and never modifies the
    receiver.

    Attributes:
        tiles: The tiles in front-to-back order.
        kind: The shape the run has committed to so far.
    """
    tiles: tuple[Tile, ...]
    kind: RunKind = UNKNOWN

    @classmethod
    def start(cls, tile: Tile) -> Run:
        """Open a new one-tile run with an undetermined shape."""
        return cls(tiles=(tile,), kind=UNKNOWN)

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def is_valid(self) -> bool:
        """Whether the run is long enough to stay in a final arrangement."""
        return len(self.tiles) >= MIN_RUN_LENGTH

    def _prepend(self, tile: Tile, kind: RunKind) -> Run:
        return Run(tiles=(tile,) + self.tiles, kind=kind)

    def _append(self, tile: Tile, kind: RunKind) -> Run:
        return Run(tiles=self.tiles + (tile,), kind=kind)

    def join(self, tile: Tile) -> JoinResult:
        """Try to extend this run with ``tile`` at either end.

        Args:
            tile: The candidate tile.

        Returns:
            ``(None, None)`` if the tile cannot extend the run,
            ``(run, None)`` for a single successor, or
            ``(prepended, appended)`` when the tile fits at both ends
            and the two placements must be explored separately.
        """
        kind = self.kind
        if isinstance(kind, NumberKind):
            return self._join_number(kind, tile)
        if isinstance(kind, ColourKind):
            return self._join_colour(kind, tile)
        return self._join_unknown(tile)

    def _join_number(self, kind: NumberKind, tile: Tile) -> JoinResult:
        if len(self.tiles) >= MAX_SET_SIZE:
            return _NO_JOIN
        if tile.is_joker:
            return (self._append(tile, kind), None)
        if tile.number != kind.number:
            return _NO_JOIN
        colours = {t.colour for t in self.tiles if not t.is_joker}
        if tile.colour in colours:
            return _NO_JOIN
        return (self._append(tile, kind), None)

    def _join_colour(self, kind: ColourKind, tile: Tile) -> JoinResult:
        colour, low, high = kind.colour, kind.low, kind.high
        if tile.is_joker:
            prepended = (
                self._prepend(tile, ColourKind(colour, low - 1, high))
                if low > rummikub.MIN_NUMBER else None
            )
            appended = (
                self._append(tile, ColourKind(colour, low, high + 1))
                if high < rummikub.MAX_NUMBER else None
            )
            return _branches(prepended, appended)
        if tile.colour != colour:
            return _NO_JOIN
        if tile.number == low - 1:
            return (self._prepend(tile, ColourKind(colour, low - 1, high)), None)
        if tile.number == high + 1:
            return (self._append(tile, ColourKind(colour, low, high + 1)), None)
        return _NO_JOIN

    def _join_unknown(self, tile: Tile) -> JoinResult:
        anchor_index = next(
            (i for i, t in enumerate(self.tiles) if not t.is_joker), None,
        )

        # Only jokers so far.
        if anchor_index is None:
            if tile.is_joker:
                return (self._append(tile, UNKNOWN), None)
            return (self._prepend(tile, UNKNOWN), self._append(tile, UNKNOWN))

        anchor = self.tiles[anchor_index]
        assert anchor.colour is not None and anchor.number is not None
        pre_js = anchor_index
        post_js = len(self.tiles) - anchor_index - 1

        if tile.is_joker:
            if anchor.number == rummikub.MAX_NUMBER:
                return (self._prepend(tile, UNKNOWN), None)
            if anchor.number == rummikub.MIN_NUMBER:
                return (self._append(tile, UNKNOWN), None)
            return (self._prepend(tile, UNKNOWN), self._append(tile, UNKNOWN))

        if tile.colour == anchor.colour:
            if tile.number == anchor.number - pre_js - 1:
                high = anchor.number + post_js
                if high > rummikub.MAX_NUMBER:
                    return _NO_JOIN
                kind = ColourKind(anchor.colour, tile.number, high)
                return (self._prepend(tile, kind), None)
            if tile.number == anchor.number + post_js + 1:
                low = anchor.number - pre_js
                if low < rummikub.MIN_NUMBER:
                    return _NO_JOIN
                kind = ColourKind(anchor.colour, low, tile.number)
                return (self._append(tile, kind), None)
            return _NO_JOIN

        # Existing jokers are not re-checked against the set shape.
        if len(self.tiles) < MAX_SET_SIZE and tile.number == anchor.number:
            return (self._append(tile, NumberKind(anchor.number)), None)
        return _NO_JOIN

    def format(self, color: bool = False) -> str:
        """Render the run's tiles through rummikub.format_list()."""
        return rummikub.format_list(self.tiles, color=color)

    def __str__(self) -> str:
        return f"{self.kind.describe()}: {' '.join(str(t) for t in self.tiles)}"


# =============================================================================
# Solving State
# =============================================================================

class Outcome(enum.Enum):
    """How far a state got, ranked so that a larger value is better."""
    NEITHER = 0     # some board tiles are still unplaced
    COMPLETED = 1   # board placed in valid runs, hand may have leftovers
    SOLVED = 2      # board and hand placed in valid runs


@dataclasses.dataclass(frozen=True)
class SolvingState:
    """A partial arrangement explored by the search.

    Every tile of the original board and hand is either still unused or
    in exactly one run. States are immutable and hashable; the search
    derives new states instead of modifying this one.

    Attributes:
        board: Unused board tiles, in input order.
        hand: Unused hand tiles, in input order.
        runs: Runs built so far, oldest first. Only the last run may be
            shorter than MIN_RUN_LENGTH.
    """
    board: tuple[Tile, ...]
    hand: tuple[Tile, ...]
    runs: tuple[Run, ...] = ()

    @classmethod
    def from_state(cls, state: rummikub.State) -> SolvingState:
        """Snapshot a board/hand state with no runs built yet."""
        return cls(board=tuple(state.board), hand=tuple(state.hand))

    @property
    def completed(self) -> bool:
        """All board tiles are placed and every run is valid."""
        return not self.board and all(run.is_valid for run in self.runs)

    @property
    def solved(self) -> bool:
        """Completed, with every hand tile placed as well."""
        return self.completed and not self.hand

    @property
    def outcome(self) -> Outcome:
        if self.solved:
            return Outcome.SOLVED
        if self.completed:
            return Outcome.COMPLETED
        return Outcome.NEITHER

    @staticmethod
    def best(
        current: SolvingState | None,
        candidate: SolvingState | None,
    ) -> SolvingState | None:
        """Pick the better of two states by outcome.

        None loses to any state. Ties keep ``current``.
        """
        if current is None:
            return candidate
        if candidate is None:
            return current
        if candidate.outcome.value > current.outcome.value:
            return candidate
        return current

    def unused_tiles(self) -> Iterator[tuple[str, int, Tile]]:
        """Yield ``(source, index, tile)`` for board tiles, then hand tiles."""
        for index, tile in enumerate(self.board):
            yield BOARD, index, tile
        for index, tile in enumerate(self.hand):
            yield HAND, index, tile

    def place(
        self,
        source: str,
        index: int,
        run_index: int,
        run: Run,
    ) -> SolvingState:
        """Derive a state with an unused tile moved into a run.

        Args:
            source: BOARD or HAND, the queue the tile is taken from.
            index: Position of the tile within that queue.
            run_index: Index of the run to replace with ``run``, or
                ``len(self.runs)`` to add ``run`` as a new run.
            run: The run that now holds the tile.

        Returns:
            The new state.
        """
        board, hand = self.board, self.hand
        if source == BOARD:
            board = board[:index] + board[index + 1:]
        else:
            hand = hand[:index] + hand[index + 1:]
        runs = self.runs[:run_index] + (run,) + self.runs[run_index + 1:]
        return SolvingState(board=board, hand=hand, runs=runs)

    def format(self, color: bool = False) -> str:
        """Render every run's tiles, one run after another."""
        return "".join(run.format(color=color) for run in self.runs)

    def __str__(self) -> str:
        lines = [str(run) for run in self.runs]
        if self.board:
            lines.append(f"Unused board: {' '.join(str(t) for t in self.board)}")
        if self.hand:
            lines.append(f"Unused hand: {' '.join(str(t) for t in self.hand)}")
        return "\n".join(lines)


# =============================================================================
# Search
# =============================================================================

def solve_state(
    state: SolvingState,
    visited: set[SolvingState],
    pbar: tqdm.tqdm | None = None,
) -> SolvingState | None:
    """Search for the best arrangement reachable from ``state``.

    Depth-first: every unused tile (board tiles first) is tried against
    every existing run, and as the start of a new run when the last run
    is already valid. The first solved state found ends the search.

    Args:
        state: The state to extend.
        visited: States already explored during this solve. Updated in
            place.
        pbar: Optional progress bar advanced once per explored state.

    Returns:
        The best state found, which is ``state`` itself unless some
        extension has a strictly better outcome. None if ``state`` was
        already visited.
    """
    if state in visited:
        logger.debug("Pruned visited state with %d runs", len(state.runs))
        return None
    visited.add(state)
    if pbar is not None:
        pbar.update(1)

    if not state.board and not state.hand:
        return state

    best: SolvingState | None = None
    can_open_run = not state.runs or state.runs[-1].is_valid
    for source, index, tile in state.unused_tiles():
        for run_index, run in enumerate(state.runs):
            for joined in run.join(tile):
                if joined is None:
                    continue
                child = state.place(source, index, run_index, joined)
                best = SolvingState.best(best, solve_state(child, visited, pbar))
                if best is not None and best.solved:
                    return best

        if can_open_run:
            child = state.place(source, index, len(state.runs), Run.start(tile))
            best = SolvingState.best(best, solve_state(child, visited, pbar))
            if best is not None and best.solved:
                return best

    return SolvingState.best(state, best)


def solve(
    state: rummikub.State,
    show_progress: bool = False,
) -> SolvingState:
    """Find the best rearrangement of a board and hand.

    Args:
        state: The board and hand to rearrange.
        show_progress: If True, display a tqdm progress bar counting
            explored states.

    Returns:
        The best state found. Check ``solved`` / ``completed`` (or
        ``outcome``) to interpret it; a state that is neither means no
        arrangement placed every board tile.
    """
    initial = SolvingState.from_state(state)
    logger.info(
        "Solving %d board tiles and %d hand tiles",
        len(initial.board), len(initial.hand),
    )
    visited: set[SolvingState] = set()

    pbar = None
    if show_progress:
        pbar = tqdm.tqdm(
            desc="Solving",
            unit=" states",
            dynamic_ncols=True,
        )
    try:
        result = solve_state(initial, visited, pbar)
    finally:
        if pbar is not None:
            pbar.close()

    # A fresh visited set never prunes the root.
    assert result is not None
    logger.info(
        "Explored %d states, outcome %s", len(visited), result.outcome.name,
    )
    return result


# =============================================================================
# Display
# =============================================================================

_OUTCOME_BANNERS = {
    Outcome.SOLVED: f"{_C.GREEN}{_C.BOLD}SOLVED{_C.RESET}",
    Outcome.COMPLETED: f"{_C.YELLOW}{_C.BOLD}COMPLETED (hand tiles left over){_C.RESET}",
    Outcome.NEITHER: f"{_C.RED}{_C.BOLD}NO ARRANGEMENT{_C.RESET}",
}


def print_solution(result: SolvingState, color: bool = True) -> None:
    """Print the outcome, the runs, and any tiles left unused.

    Args:
        result: A state returned by solve().
        color: If True, use ANSI colours for tiles and the banner.
    """
    if color:
        print(_OUTCOME_BANNERS[result.outcome])
    else:
        print(result.outcome.name)
    for i, run in enumerate(result.runs, start=1):
        print(f"  Run {i} [{run.kind.describe()}]: {run.format(color=color)}", end="")
    if result.board:
        print(f"  Unused board: {rummikub.format_list(result.board, color=color)}", end="")
    if result.hand:
        print(f"  Unused hand: {rummikub.format_list(result.hand, color=color)}", end="")
