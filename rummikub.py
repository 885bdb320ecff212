"""Rummikub tile model.

Core classes representing Rummikub tiles, colours, and the board/hand
snapshot handed to the solver. Supports shorthand tile notation
(``r5``, ``x12``, ``j``) for quick entry of game states.
"""

from __future__ import annotations

import bisect
import dataclasses
import enum
import functools
import random

# Tile numbers run from MIN_NUMBER to MAX_NUMBER inclusive.
MIN_NUMBER = 1
MAX_NUMBER = 13

# A full tile set holds COPIES_PER_TILE of every colour/number pair plus
# JOKER_COUNT jokers (106 tiles).
COPIES_PER_TILE = 2
JOKER_COUNT = 2

# Number of tiles rendered per line by format_list().
TILES_PER_LINE = 10

JOKER_CHAR = "j"


# =============================================================================
# ANSI Color Constants
# =============================================================================

class _Colors:
    """ANSI escape codes for terminal coloring."""
    BLUE = "\033[94m"
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    GREY = "\033[90m"
    ORANGE = "\033[38;5;208m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


# =============================================================================
# Enums
# =============================================================================

class Colour(enum.Enum):
    """Colour of a numbered tile.

    Declaration order is the sort order of tiles sharing a number.
    """
    RED = "r"
    BLUE = "b"
    YELLOW = "y"
    BLACK = "x"

    @property
    def char(self) -> str:
        """The single-character code used in tile notation."""
        return self.value

    @property
    def rank(self) -> int:
        """Position of this colour in the declaration order."""
        return _COLOUR_ORDER.index(self)

    def ansi(self) -> str:
        """Returns the ANSI color code for this tile colour."""
        return {
            Colour.RED: _Colors.RED,
            Colour.BLUE: _Colors.BLUE,
            Colour.YELLOW: _Colors.YELLOW,
            Colour.BLACK: _Colors.GREY,
        }[self]

    @classmethod
    def from_char(cls, char: str) -> Colour:
        """Look up a colour by its notation code.

        Raises:
            ValueError: If ``char`` is not a known colour code.
        """
        for colour in cls:
            if colour.value == char:
                return colour
        raise ValueError(f"Invalid colour: {char!r}")


_COLOUR_ORDER = list(Colour)


# =============================================================================
# Tile
# =============================================================================

@functools.total_ordering
@dataclasses.dataclass(frozen=True)
class Tile:
    """A physical Rummikub tile.

    A normal tile carries both a colour and a number; a joker carries
    neither.

    Attributes:
        colour: The tile colour, or None for a joker.
        number: The printed number (1-13), or None for a joker.
    """
    colour: Colour | None = None
    number: int | None = None

    def __post_init__(self) -> None:
        if (self.colour is None) != (self.number is None):
            raise ValueError(
                f"Tile needs both a colour and a number, or neither "
                f"(joker), got colour={self.colour}, number={self.number}"
            )
        if self.number is not None and not (
            MIN_NUMBER <= self.number <= MAX_NUMBER
        ):
            raise ValueError(
                f"Number out of range {MIN_NUMBER}-{MAX_NUMBER}: "
                f"{self.number}"
            )

    @classmethod
    def joker(cls) -> Tile:
        """Create a joker tile."""
        return cls()

    @property
    def is_joker(self) -> bool:
        """Whether this tile is a joker."""
        return self.colour is None

    def _sort_key(self) -> tuple[int, int, int]:
        # Normal tiles by (colour, number), jokers after every normal tile.
        if self.colour is None or self.number is None:
            return (1, 0, 0)
        return (0, self.colour.rank, self.number)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def ansi_label(self) -> str:
        """The notation token wrapped in ANSI colour codes."""
        if self.colour is None:
            return f"{_Colors.BOLD}{_Colors.ORANGE}{self}{_Colors.RESET}"
        return f"{self.colour.ansi()}{self}{_Colors.RESET}"

    def __str__(self) -> str:
        if self.colour is None:
            return JOKER_CHAR
        return f"{self.colour.char}{self.number}"

    def __repr__(self) -> str:
        if self.colour is None:
            return "Tile(JOKER)"
        return f"Tile({self.colour.name}, {self.number})"


JOKER = Tile.joker()


def parse_tile(token: str) -> Tile:
    """Parse a shorthand token into a Tile.

    Token formats:
        j         joker
        CN        colour code C (``r``, ``b``, ``y``, ``x``) followed by
                  number N (e.g., ``r5``, ``x12``)

    Args:
        token: The shorthand string for a single tile. Surrounding
            whitespace is ignored.

    Returns:
        The corresponding Tile.

    Raises:
        ValueError: If the token cannot be parsed.
    """
    token = token.strip()
    if not token:
        raise ValueError("Empty tile token")
    if len(token) == 1:
        if token == JOKER_CHAR:
            return JOKER
        raise ValueError(f"Not a joker: {token!r}")

    colour = Colour.from_char(token[0])
    try:
        number = int(token[1:])
    except ValueError:
        raise ValueError(f"Invalid number: {token!r}")
    if not (MIN_NUMBER <= number <= MAX_NUMBER):
        raise ValueError(f"Number out of range: {token!r}")
    return Tile(colour, number)


def parse_tiles(notation: str) -> list[Tile]:
    """Parse whitespace-separated tile tokens.

    Raises:
        ValueError: If any token cannot be parsed.
    """
    return [parse_tile(t) for t in notation.split()]


def format_list(
    tiles: list[Tile] | tuple[Tile, ...],
    per_line: int = TILES_PER_LINE,
    color: bool = False,
) -> str:
    """Render tiles as notation tokens, ``per_line`` tiles per line.

    Every line, including the last, ends with a newline. An empty list
    renders as an empty string.

    Args:
        tiles: The tiles to render, in order.
        per_line: Maximum tiles per line.
        color: If True, wrap each token in ANSI colour codes.

    Returns:
        The formatted string.
    """
    lines = []
    for start in range(0, len(tiles), per_line):
        chunk = tiles[start:start + per_line]
        labels = [t.ansi_label() if color else str(t) for t in chunk]
        lines.append(" ".join(labels) + "\n")
    return "".join(lines)


# =============================================================================
# Tile Set Factory Functions
# =============================================================================

def create_full_tile_set() -> list[Tile]:
    """Create the full 106-tile set.

    Returns:
        Two copies of every colour/number pair followed by two jokers.
    """
    tiles = []
    for colour in Colour:
        for number in range(MIN_NUMBER, MAX_NUMBER + 1):
            for _ in range(COPIES_PER_TILE):
                tiles.append(Tile(colour, number))
    tiles.extend(Tile.joker() for _ in range(JOKER_COUNT))
    return tiles


def deal_state(
    board_size: int,
    hand_size: int,
    seed: int | None = None,
) -> State:
    """Deal a random board and hand from a shuffled full tile set.

    Args:
        board_size: Number of tiles placed on the board.
        hand_size: Number of tiles placed in the hand.
        seed: Optional random seed for reproducibility.

    Returns:
        A new State with sorted board and hand.

    Raises:
        ValueError: If the sizes are negative or exceed the tile set.
    """
    pool = create_full_tile_set()
    if board_size < 0 or hand_size < 0:
        raise ValueError(
            f"Sizes must be non-negative, got board={board_size}, "
            f"hand={hand_size}"
        )
    if board_size + hand_size > len(pool):
        raise ValueError(
            f"Cannot deal {board_size + hand_size} tiles from a set "
            f"of {len(pool)}"
        )
    rng = random.Random(seed)
    rng.shuffle(pool)
    state = State()
    for tile in pool[:board_size]:
        state.add_to_board(tile)
    for tile in pool[board_size:board_size + hand_size]:
        state.add_to_hand(tile)
    return state


# =============================================================================
# State
# =============================================================================

@dataclasses.dataclass
class State:
    """The tiles on the shared board and in the solving player's hand.

    Both containers are kept sorted ascending (normal tiles by colour
    then number, jokers last).

    Attributes:
        board: Tiles already played on the board.
        hand: Tiles held by the solving player.
    """
    board: list[Tile] = dataclasses.field(default_factory=list)
    hand: list[Tile] = dataclasses.field(default_factory=list)

    @classmethod
    def from_strings(cls, board: str = "", hand: str = "") -> State:
        """Create a state from shorthand notation.

        Args:
            board: Whitespace-separated tile tokens for the board.
            hand: Whitespace-separated tile tokens for the hand.

        Returns:
            A new State with both containers sorted.

        Raises:
            ValueError: If any token cannot be parsed.

        Examples:
            ::

                State.from_strings("r1 r2 r3 j", hand="b5 y5")
        """
        state = cls()
        for tile in parse_tiles(board):
            state.add_to_board(tile)
        for tile in parse_tiles(hand):
            state.add_to_hand(tile)
        return state

    def add_to_board(self, tile: Tile) -> None:
        """Insert a tile into the board, keeping it sorted."""
        bisect.insort(self.board, tile)

    def add_to_hand(self, tile: Tile) -> None:
        """Insert a tile into the hand, keeping it sorted."""
        bisect.insort(self.hand, tile)

    def format(self, color: bool = False) -> str:
        """Render the board and hand under ``Board:`` / ``Hand:`` headers."""
        return (
            "Board:\n" + format_list(self.board, color=color)
            + "Hand:\n" + format_list(self.hand, color=color)
        )

    def __str__(self) -> str:
        return self.format(color=True)
