"""
Tests for flood-fill region discovery and region pricing.
"""

from geometry import Cardinal, CardinalSet, Grid, GridAddress
from flood import PriceMetric, flood_fill


def garden(*rows: str) -> Grid[str]:
    return Grid.from_rows(rows)


# =============================================================================
# Test Region Assignment
# =============================================================================


class TestFloodFill:
    """Tests for region assignment."""

    def test_worked_example_regions(self) -> None:
        """AAAA / BBCD / BBCC / EEEC has five regions, seeded in raster order."""
        flood = flood_fill(garden("AAAA", "BBCD", "BBCC", "EEEC"))
        assert [(r.label, r.size) for r in flood.regions.values()] == [
            ("A", 4),
            ("B", 4),
            ("C", 4),
            ("D", 1),
            ("E", 3),
        ]

    def test_sizes_cover_every_tile(self) -> None:
        grid = garden("RRRRIICCFF", "RRRRIICCCF", "VVRRRCCFFF", "VVRCCCJFFF")
        flood = flood_fill(grid)
        assert sum(region.size for region in flood.regions.values()) == grid.width * grid.height
        seen = [address for region in flood.regions.values() for address in region.addresses]
        assert len(seen) == len(set(seen)) == grid.width * grid.height

    def test_same_letter_disconnected_regions(self) -> None:
        """Equal tiles only share a region when a cardinal path of equal tiles joins them."""
        flood = flood_fill(garden("OXO", "XXX", "OXO"))
        o_regions = [r for r in flood.regions.values() if r.label == "O"]
        assert len(o_regions) == 4
        assert len(flood.regions) == 5

    def test_diagonal_is_not_adjacent(self) -> None:
        flood = flood_fill(garden("AB", "BA"))
        assert len(flood.regions) == 4

    def test_region_ids_grid(self) -> None:
        flood = flood_fill(garden("AAB", "ABB"))
        assert flood.region_ids.rows == [[0, 0, 1], [0, 1, 1]]
        assert flood.region_at(GridAddress(2, 1)).label == "B"

    def test_custom_equivalence(self) -> None:
        """The equivalence predicate is supplied by the caller."""
        grid = Grid([[1, 3, 2], [5, 7, 4]])
        flood = flood_fill(grid, lambda a, b: a % 2 == b % 2)
        assert len(flood.regions) == 2
        assert flood.regions[0].size == 4
        assert flood.regions[1].addresses == [GridAddress(2, 0), GridAddress(2, 1)]

    def test_large_region_does_not_recurse(self) -> None:
        """One region spanning many tiles is handled without recursion limits."""
        grid = Grid.new_default(300, 300, "A")
        flood = flood_fill(grid)
        assert len(flood.regions) == 1
        assert flood.regions[0].size == 90_000

    def test_empty_grid(self) -> None:
        flood = flood_fill(Grid([]))
        assert flood.regions == {}
        assert flood.price(PriceMetric.PERIMETER) == 0


# =============================================================================
# Test Fences and Sides
# =============================================================================


class TestFencesAndSides:
    """Tests for per-tile fences and per-region side counting."""

    def test_single_isolated_tile(self) -> None:
        """A tile unlike all its neighbours has four fences and four sides."""
        flood = flood_fill(garden("AAA", "ABA", "AAA"))
        b = flood.region_at(GridAddress(1, 1))
        assert flood.fences[GridAddress(1, 1)] == CardinalSet.of(*Cardinal)
        assert flood.fence_count(b) == 4
        assert flood.side_count(b) == 4

    def test_single_tile_grid(self) -> None:
        flood = flood_fill(garden("Z"))
        region = flood.regions[0]
        assert flood.fence_count(region) == 4
        assert flood.side_count(region) == 4

    def test_rectangle_has_four_sides(self) -> None:
        """A full rectangular region has exactly four sides regardless of its size."""
        for width, height in [(1, 1), (1, 5), (4, 1), (3, 7), (6, 6)]:
            flood = flood_fill(Grid.new_default(width, height, "R"))
            region = flood.regions[0]
            assert flood.side_count(region) == 4
            assert flood.fence_count(region) == 2 * (width + height)

    def test_fences_on_grid_edge(self) -> None:
        flood = flood_fill(garden("AB"))
        assert flood.fences[GridAddress(0, 0)] == CardinalSet.of(*Cardinal)
        assert flood.fences[GridAddress(1, 0)] == CardinalSet.of(*Cardinal)

    def test_inner_hole_sides(self) -> None:
        """A region surrounding a hole counts the hole's sides too."""
        flood = flood_fill(garden("AAA", "ABA", "AAA"))
        a = flood.region_at(GridAddress(0, 0))
        assert flood.fence_count(a) == 16
        assert flood.side_count(a) == 8

    def test_worked_example_region_metrics(self) -> None:
        flood = flood_fill(garden("AAAA", "BBCD", "BBCC", "EEEC"))
        metrics = {
            r.label: (flood.fence_count(r), flood.side_count(r)) for r in flood.regions.values()
        }
        assert metrics == {
            "A": (10, 4),
            "B": (8, 4),
            "C": (10, 8),
            "D": (4, 4),
            "E": (8, 4),
        }


# =============================================================================
# Test Pricing
# =============================================================================


class TestPricing:
    """Tests for the two region price metrics."""

    def test_worked_example_prices(self) -> None:
        flood = flood_fill(garden("AAAA", "BBCD", "BBCC", "EEEC"))
        assert flood.price(PriceMetric.PERIMETER) == 140
        assert flood.price(PriceMetric.SIDES) == 80

    def test_region_price(self) -> None:
        flood = flood_fill(garden("AAAA", "BBCD", "BBCC", "EEEC"))
        c = flood.region_at(GridAddress(2, 1))
        assert flood.region_price(c, PriceMetric.PERIMETER) == 40
        assert flood.region_price(c, PriceMetric.SIDES) == 32

    def test_nested_regions_prices(self) -> None:
        """O regions inside an X region: five regions, hand-computed prices."""
        flood = flood_fill(garden("OOOOO", "OXOXO", "OOOOO", "OXOXO", "OOOOO"))
        assert flood.price(PriceMetric.PERIMETER) == 772
        assert flood.price(PriceMetric.SIDES) == 436
