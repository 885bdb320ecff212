"""Unit tests for the rummikub tile model."""

import unittest

from rummikub import (
    JOKER,
    Colour,
    State,
    Tile,
    create_full_tile_set,
    deal_state,
    format_list,
    parse_tile,
    parse_tiles,
)


class TestColour(unittest.TestCase):
    """Tests for the Colour enum."""

    def test_chars(self) -> None:
        self.assertEqual(
            [c.char for c in Colour], ["r", "b", "y", "x"],
        )

    def test_from_char(self) -> None:
        self.assertEqual(Colour.from_char("x"), Colour.BLACK)

    def test_from_char_invalid(self) -> None:
        with self.assertRaises(ValueError):
            Colour.from_char("g")

    def test_rank_follows_declaration_order(self) -> None:
        self.assertEqual(
            [c.rank for c in Colour], [0, 1, 2, 3],
        )


class TestTile(unittest.TestCase):
    """Tests for the Tile dataclass."""

    def test_normal_tile(self) -> None:
        t = Tile(Colour.RED, 5)
        self.assertFalse(t.is_joker)
        self.assertEqual(t.colour, Colour.RED)
        self.assertEqual(t.number, 5)

    def test_joker(self) -> None:
        self.assertTrue(JOKER.is_joker)
        self.assertIsNone(JOKER.colour)
        self.assertIsNone(JOKER.number)
        self.assertEqual(Tile.joker(), JOKER)

    def test_colour_without_number_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Tile(Colour.RED, None)

    def test_number_without_colour_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Tile(None, 4)

    def test_number_out_of_range_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Tile(Colour.BLUE, 14)
        with self.assertRaises(ValueError):
            Tile(Colour.BLUE, 0)

    def test_equality_and_hash(self) -> None:
        t1 = Tile(Colour.BLUE, 7)
        t2 = Tile(Colour.BLUE, 7)
        self.assertEqual(t1, t2)
        self.assertEqual(len({t1, t2}), 1)

    def test_frozen(self) -> None:
        t = Tile(Colour.BLUE, 7)
        with self.assertRaises(AttributeError):
            t.number = 8  # type: ignore[misc]

    def test_sort_by_colour_then_number(self) -> None:
        tiles = [
            Tile(Colour.BLACK, 1),
            Tile(Colour.RED, 9),
            Tile(Colour.BLUE, 2),
            Tile(Colour.RED, 3),
        ]
        self.assertEqual(
            [str(t) for t in sorted(tiles)], ["r3", "r9", "b2", "x1"],
        )

    def test_joker_sorts_last(self) -> None:
        tiles = [JOKER, Tile(Colour.BLACK, 13), Tile(Colour.RED, 1)]
        self.assertEqual(sorted(tiles)[-1], JOKER)

    def test_str(self) -> None:
        self.assertEqual(str(Tile(Colour.YELLOW, 11)), "y11")
        self.assertEqual(str(JOKER), "j")

    def test_ansi_label_contains_token(self) -> None:
        self.assertIn("x4", Tile(Colour.BLACK, 4).ansi_label())
        self.assertIn("j", JOKER.ansi_label())


class TestParseTile(unittest.TestCase):
    """Tests for parse_tile / parse_tiles."""

    def test_parse_normal(self) -> None:
        self.assertEqual(parse_tile("r5"), Tile(Colour.RED, 5))
        self.assertEqual(parse_tile("x13"), Tile(Colour.BLACK, 13))

    def test_parse_joker(self) -> None:
        self.assertEqual(parse_tile("j"), JOKER)

    def test_strips_whitespace(self) -> None:
        self.assertEqual(parse_tile("  b2\n"), Tile(Colour.BLUE, 2))

    def test_empty(self) -> None:
        with self.assertRaisesRegex(ValueError, "Empty"):
            parse_tile("")

    def test_single_char_not_joker(self) -> None:
        with self.assertRaisesRegex(ValueError, "joker"):
            parse_tile("r")

    def test_invalid_colour(self) -> None:
        with self.assertRaisesRegex(ValueError, "colour"):
            parse_tile("g5")

    def test_invalid_number(self) -> None:
        with self.assertRaisesRegex(ValueError, "Invalid number"):
            parse_tile("rx")

    def test_number_out_of_range(self) -> None:
        with self.assertRaisesRegex(ValueError, "out of range"):
            parse_tile("r14")
        with self.assertRaisesRegex(ValueError, "out of range"):
            parse_tile("r0")

    def test_parse_tiles(self) -> None:
        self.assertEqual(
            parse_tiles("r1  b2 j"),
            [Tile(Colour.RED, 1), Tile(Colour.BLUE, 2), JOKER],
        )

    def test_parse_tiles_empty(self) -> None:
        self.assertEqual(parse_tiles("   "), [])


class TestFormatList(unittest.TestCase):
    """Tests for format_list."""

    def test_empty(self) -> None:
        self.assertEqual(format_list([]), "")

    def test_single_line(self) -> None:
        self.assertEqual(format_list(parse_tiles("r1 r2 j")), "r1 r2 j\n")

    def test_chunks_of_ten(self) -> None:
        tiles = parse_tiles("r1 r2 r3 r4 r5 r6 r7 r8 r9 r10 r11 r12")
        self.assertEqual(
            format_list(tiles),
            "r1 r2 r3 r4 r5 r6 r7 r8 r9 r10\nr11 r12\n",
        )

    def test_custom_width(self) -> None:
        self.assertEqual(
            format_list(parse_tiles("b1 b2 b3"), per_line=2),
            "b1 b2\nb3\n",
        )

    def test_tuple_input(self) -> None:
        self.assertEqual(format_list(tuple(parse_tiles("y7"))), "y7\n")


class TestTileSet(unittest.TestCase):
    """Tests for the tile set factory and random dealing."""

    def test_full_set_size(self) -> None:
        self.assertEqual(len(create_full_tile_set()), 106)

    def test_full_set_distribution(self) -> None:
        tiles = create_full_tile_set()
        self.assertEqual(sum(1 for t in tiles if t.is_joker), 2)
        for colour in Colour:
            for number in range(1, 14):
                self.assertEqual(tiles.count(Tile(colour, number)), 2)

    def test_deal_sizes(self) -> None:
        state = deal_state(12, 5, seed=3)
        self.assertEqual(len(state.board), 12)
        self.assertEqual(len(state.hand), 5)

    def test_deal_sorted(self) -> None:
        state = deal_state(20, 10, seed=11)
        self.assertEqual(state.board, sorted(state.board))
        self.assertEqual(state.hand, sorted(state.hand))

    def test_deal_reproducible(self) -> None:
        self.assertEqual(deal_state(8, 4, seed=5), deal_state(8, 4, seed=5))

    def test_deal_too_many(self) -> None:
        with self.assertRaises(ValueError):
            deal_state(100, 10)

    def test_deal_negative(self) -> None:
        with self.assertRaises(ValueError):
            deal_state(-1, 3)


class TestState(unittest.TestCase):
    """Tests for the board/hand State."""

    def test_empty(self) -> None:
        state = State()
        self.assertEqual(state.board, [])
        self.assertEqual(state.hand, [])

    def test_add_keeps_sorted(self) -> None:
        state = State()
        for token in ["j", "x2", "r9", "b1", "r2"]:
            state.add_to_board(parse_tile(token))
        self.assertEqual(
            [str(t) for t in state.board], ["r2", "r9", "b1", "x2", "j"],
        )

    def test_add_to_hand(self) -> None:
        state = State()
        state.add_to_hand(parse_tile("y3"))
        state.add_to_hand(parse_tile("y1"))
        self.assertEqual([str(t) for t in state.hand], ["y1", "y3"])
        self.assertEqual(state.board, [])

    def test_from_strings(self) -> None:
        state = State.from_strings("j r2 r3", hand="b5")
        self.assertEqual([str(t) for t in state.board], ["r2", "r3", "j"])
        self.assertEqual([str(t) for t in state.hand], ["b5"])

    def test_from_strings_invalid(self) -> None:
        with self.assertRaises(ValueError):
            State.from_strings("r2 q3")

    def test_duplicates_kept(self) -> None:
        state = State.from_strings("r5 r5")
        self.assertEqual(len(state.board), 2)

    def test_format(self) -> None:
        state = State.from_strings("r1 r2", hand="j")
        self.assertEqual(state.format(), "Board:\nr1 r2\nHand:\nj\n")

    def test_format_empty(self) -> None:
        self.assertEqual(State().format(), "Board:\nHand:\n")


if __name__ == "__main__":
    unittest.main()
