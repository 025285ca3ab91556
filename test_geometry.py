"""
Tests for the grid geometry primitives and the Grid container.
"""

import pytest

from geometry import (
    UNKNOWN_GLYPH,
    Cardinal,
    CardinalSet,
    Grid,
    GridAddress,
    GridDelta,
    GridIndexError,
)


# =============================================================================
# Test Addresses and Deltas
# =============================================================================


class TestGridAddress:
    """Tests for address arithmetic."""

    def test_checked_add_moves_address(self) -> None:
        """Adding a delta translates both axes."""
        assert GridAddress(2, 3).checked_add(GridDelta(1, -2)) == GridAddress(3, 1)

    def test_checked_add_underflow_is_absent(self) -> None:
        """Going below zero on either axis yields None rather than an error."""
        assert GridAddress(0, 5).checked_add(GridDelta.LEFT) is None
        assert GridAddress(5, 0).checked_add(GridDelta.UP) is None
        assert GridAddress(0, 0).checked_add(GridDelta.UP_LEFT) is None

    def test_checked_add_ignores_upper_bounds(self) -> None:
        """Address arithmetic knows nothing about grid extents."""
        assert GridAddress(1_000, 1_000).checked_add(GridDelta.DOWN_RIGHT) == GridAddress(1_001, 1_001)

    def test_checked_add_accepts_cardinal(self) -> None:
        """A Cardinal can be used directly as a unit delta."""
        assert GridAddress(1, 1).checked_add(Cardinal.NORTH) == GridAddress(1, 0)

    def test_round_trip_through_opposite(self) -> None:
        """Stepping in a direction and back returns to the start whenever no step underflows."""
        for x in range(3):
            for y in range(3):
                start = GridAddress(x, y)
                for cardinal in Cardinal:
                    there = start.checked_add(cardinal.delta)
                    if there is None:
                        continue
                    assert there.checked_add(cardinal.opposite().delta) == start

    def test_negative_coordinates_rejected(self) -> None:
        """Addresses are unsigned."""
        with pytest.raises(ValueError, match="non-negative"):
            GridAddress(-1, 0)

    def test_value_semantics(self) -> None:
        """Equality and hashing are by value."""
        assert GridAddress(1, 2) == GridAddress(1, 2)
        assert len({GridAddress(1, 2), GridAddress(1, 2), GridAddress(2, 1)}) == 2

    def test_manhattan(self) -> None:
        assert GridAddress(1, 5).manhattan(GridAddress(4, 1)) == 7


class TestGridDelta:
    """Tests for signed displacements."""

    def test_inverted(self) -> None:
        assert GridDelta(2, -3).inverted() == GridDelta(-2, 3)
        for delta in GridDelta.CARDINALS_AND_DIAGONALS:
            assert delta.inverted().inverted() == delta

    def test_vector_between(self) -> None:
        """The displacement from a to b moves a onto b."""
        a = GridAddress(5, 1)
        b = GridAddress(2, 4)
        delta = GridDelta.vector_between(a, b)
        assert delta == GridDelta(-3, 3)
        assert a.checked_add(delta) == b
        assert GridDelta.vector_between(b, a) == delta.inverted()

    def test_vector_between_same_address(self) -> None:
        assert GridDelta.vector_between(GridAddress(3, 3), GridAddress(3, 3)) == GridDelta(0, 0)

    def test_named_constants(self) -> None:
        """Unit deltas follow the y-down convention."""
        assert GridDelta.UP == GridDelta(0, -1)
        assert GridDelta.DOWN_LEFT == GridDelta(-1, 1)
        assert len(GridDelta.CARDINALS) == 4
        assert len(GridDelta.DIAGONALS) == 4
        assert len(set(GridDelta.CARDINALS_AND_DIAGONALS)) == 8


# =============================================================================
# Test Cardinals
# =============================================================================


class TestCardinal:
    """Tests for the closed cardinal-direction algebra."""

    def test_unit_deltas(self) -> None:
        assert Cardinal.NORTH.delta == GridDelta(0, -1)
        assert Cardinal.EAST.delta == GridDelta(1, 0)
        assert Cardinal.SOUTH.delta == GridDelta(0, 1)
        assert Cardinal.WEST.delta == GridDelta(-1, 0)

    def test_four_right_turns_cycle(self) -> None:
        for cardinal in Cardinal:
            assert cardinal.turn_right().turn_right().turn_right().turn_right() == cardinal

    def test_turn_left_inverts_turn_right(self) -> None:
        for cardinal in Cardinal:
            assert cardinal.turn_right().turn_left() == cardinal
            assert cardinal.turn_left().turn_right() == cardinal

    def test_turn_right_is_clockwise(self) -> None:
        assert Cardinal.NORTH.turn_right() == Cardinal.EAST
        assert Cardinal.NORTH.turn_left() == Cardinal.WEST

    def test_opposite_is_involution(self) -> None:
        for cardinal in Cardinal:
            assert cardinal.opposite() != cardinal
            assert cardinal.opposite().opposite() == cardinal
            assert cardinal.opposite().delta == cardinal.delta.inverted()

    def test_iteration_order(self) -> None:
        assert list(Cardinal) == [Cardinal.NORTH, Cardinal.EAST, Cardinal.SOUTH, Cardinal.WEST]

    def test_between(self) -> None:
        origin = GridAddress(2, 2)
        assert Cardinal.between(origin, GridAddress(2, 1)) == Cardinal.NORTH
        assert Cardinal.between(origin, GridAddress(3, 2)) == Cardinal.EAST
        assert Cardinal.between(origin, GridAddress(2, 3)) == Cardinal.SOUTH
        assert Cardinal.between(origin, GridAddress(1, 2)) == Cardinal.WEST
        assert Cardinal.between(origin, origin) is None


class TestCardinalSet:
    """Tests for the 4-bit direction set."""

    def test_empty_set(self) -> None:
        empty = CardinalSet()
        assert empty.is_empty()
        assert len(empty) == 0
        assert not empty

    def test_add_and_contains(self) -> None:
        fences = CardinalSet().add(Cardinal.NORTH) | Cardinal.WEST
        assert Cardinal.NORTH in fences
        assert Cardinal.WEST in fences
        assert Cardinal.EAST not in fences
        assert len(fences) == 2
        assert list(fences) == [Cardinal.NORTH, Cardinal.WEST]

    def test_add_is_idempotent(self) -> None:
        once = CardinalSet.of(Cardinal.SOUTH)
        assert once.add(Cardinal.SOUTH) == once

    def test_bit_layout(self) -> None:
        assert CardinalSet.of(Cardinal.NORTH).bits == 0b1000
        assert CardinalSet.of(Cardinal.EAST).bits == 0b0100
        assert CardinalSet.of(Cardinal.SOUTH).bits == 0b0010
        assert CardinalSet.of(Cardinal.WEST).bits == 0b0001

    def test_box_drawing_total_and_distinct(self) -> None:
        """Every 4-bit mask maps to its own glyph, none of them the unknown marker."""
        glyphs = [CardinalSet(bits).to_box_drawing_char() for bits in range(16)]
        assert UNKNOWN_GLYPH not in glyphs
        assert len(set(glyphs)) == 16

    def test_box_drawing_examples(self) -> None:
        assert CardinalSet.of(Cardinal.NORTH, Cardinal.SOUTH).to_box_drawing_char() == "│"
        assert CardinalSet.of(Cardinal.EAST, Cardinal.SOUTH).to_box_drawing_char() == "┌"
        assert CardinalSet.of(*Cardinal).to_box_drawing_char() == "┼"
        assert CardinalSet().to_box_drawing_char() == " "

    def test_box_drawing_out_of_domain(self) -> None:
        """Masks outside 0..15 cannot come from directions, and render as the unknown marker."""
        assert CardinalSet(16).to_box_drawing_char() == UNKNOWN_GLYPH


# =============================================================================
# Test Grid Container
# =============================================================================


def letters() -> Grid[str]:
    return Grid.from_rows(["abc", "def"])


class TestGrid:
    """Tests for the Grid container."""

    def test_dimensions(self) -> None:
        grid = letters()
        assert grid.width == 3
        assert grid.height == 2

    def test_empty_grid_dimensions(self) -> None:
        grid: Grid[str] = Grid([])
        assert grid.width == 0
        assert grid.height == 0

    def test_checked_get(self) -> None:
        grid = letters()
        assert grid.get(0, 0) == "a"
        assert grid.get(2, 1) == "f"
        assert grid.get_at(GridAddress(1, 1)) == "e"

    def test_checked_get_out_of_range(self) -> None:
        """Out of range on either axis is absence, including negative indices."""
        grid = letters()
        assert grid.get(3, 0) is None
        assert grid.get(0, 2) is None
        assert grid.get(-1, 0) is None
        assert grid.get_at(GridAddress(5, 5)) is None

    def test_set(self) -> None:
        grid = letters()
        assert grid.set(1, 0, "B")
        assert grid.get(1, 0) == "B"
        assert not grid.set(9, 0, "Z")
        assert not grid.set_at(GridAddress(0, 9), "Z")

    def test_index_in_bounds(self) -> None:
        grid = letters()
        grid[GridAddress(2, 0)] = "C"
        assert grid[GridAddress(2, 0)] == "C"

    def test_index_out_of_bounds_faults(self) -> None:
        """The unchecked tier treats a bad address as a programming error."""
        grid = letters()
        with pytest.raises(GridIndexError, match="Illegal address"):
            grid[GridAddress(3, 0)]
        with pytest.raises(IndexError):
            grid[GridAddress(0, 2)] = "x"

    def test_new_default(self) -> None:
        grid = Grid.new_default(4, 2, 0)
        assert grid.width == 4
        assert grid.height == 2
        assert all(tile == 0 for _, tile in grid.items())

    def test_new_default_factory_does_not_share(self) -> None:
        grid: Grid[list[int]] = Grid.new_default(2, 2, list)
        grid[GridAddress(0, 0)].append(1)
        assert grid[GridAddress(1, 1)] == []

    def test_addresses_raster_order(self) -> None:
        assert list(letters().addresses()) == [
            GridAddress(0, 0),
            GridAddress(1, 0),
            GridAddress(2, 0),
            GridAddress(0, 1),
            GridAddress(1, 1),
            GridAddress(2, 1),
        ]

    def test_neighbors_are_bounded(self) -> None:
        neighbors = list(letters().neighbors(GridAddress(0, 0)))
        assert neighbors == [
            (Cardinal.EAST, GridAddress(1, 0), "b"),
            (Cardinal.SOUTH, GridAddress(0, 1), "d"),
        ]

    def test_neighbors_include_none_tiles(self) -> None:
        """A None tile inside the grid is still a neighbour."""
        grid: Grid[int | None] = Grid([[None, 1], [2, None]])
        assert list(grid.neighbors(GridAddress(1, 0))) == [
            (Cardinal.SOUTH, GridAddress(1, 1), None),
            (Cardinal.WEST, GridAddress(0, 0), None),
        ]

    def test_find(self) -> None:
        assert letters().find(lambda tile: tile == "e") == GridAddress(1, 1)
        assert letters().find(lambda tile: tile == "z") is None

    def test_map(self) -> None:
        upper = letters().map(lambda tile, address: f"{tile.upper()}{address.x}")
        assert upper.rows == [["A0", "B1", "C2"], ["D0", "E1", "F2"]]

    def test_copy_is_independent(self) -> None:
        """A copy can be mutated by a separate pass without touching the original."""
        original: Grid[list[str]] = Grid([[["a"], ["b"]]])
        clone = original.copy()
        clone[GridAddress(0, 0)].append("x")
        clone[GridAddress(1, 0)] = ["z"]
        assert original.rows == [[["a"], ["b"]]]
        assert clone != original
