"""
Region discovery by flood fill.

A grid is partitioned into maximal regions of cardinally-connected tiles that
share an equivalence class. Every tile also records which of its four edges
are fences, i.e. border a tile outside its region (or the edge of the grid).
Regions can then be priced by perimeter (fence count) or by sides (maximal
straight runs of fences).
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, TypeVar

from geometry import Cardinal, CardinalSet, Grid, GridAddress

logger = logging.getLogger(__name__)

Tile = TypeVar("Tile")

UNASSIGNED = -1


class PriceMetric(Enum):
    """What a region's size is multiplied by when pricing it."""

    PERIMETER = "perimeter"  # total number of fences
    SIDES = "sides"  # number of contiguous fence runs


@dataclass
class Region(Generic[Tile]):
    """A maximal connected set of equivalent tiles."""

    id: int
    label: Tile
    addresses: list[GridAddress] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.addresses)


@dataclass
class Flood(Generic[Tile]):
    """
    Result of flood_fill().

    region_ids and fences are parallel to the source grid; regions maps each
    region id to its Region, in discovery (raster) order.
    """

    region_ids: Grid[int]
    fences: Grid[CardinalSet]
    regions: dict[int, Region[Tile]]

    def region_at(self, address: GridAddress) -> Region[Tile]:
        return self.regions[self.region_ids[address]]

    def fence_count(self, region: Region[Tile]) -> int:
        return sum(len(self.fences[address]) for address in region.addresses)

    def side_count(self, region: Region[Tile]) -> int:
        """
        Count maximal runs of same-direction fences along the region's boundary.

        Each unseen (address, fence direction) pair starts a new side, which is
        then followed perpendicular to the fence in both directions for as long
        as the neighbour stays in the region and carries the same fence.
        """
        seen: set[tuple[GridAddress, Cardinal]] = set()
        sides = 0
        for address in region.addresses:
            for cardinal in self.fences[address]:
                if (address, cardinal) in seen:
                    continue
                sides += 1
                seen.add((address, cardinal))
                length = 1
                for along in (cardinal.turn_right(), cardinal.turn_left()):
                    pos = address
                    while True:
                        step = pos.checked_add(along.delta)
                        if step is None or self.region_ids.get_at(step) != region.id:
                            break
                        if cardinal not in self.fences[step]:
                            break
                        seen.add((step, cardinal))
                        length += 1
                        pos = step
                logger.debug("found %s side of %s with length %d", cardinal.name, address, length)
        return sides

    def metric(self, region: Region[Tile], metric: PriceMetric) -> int:
        match metric:
            case PriceMetric.PERIMETER:
                return self.fence_count(region)
            case PriceMetric.SIDES:
                return self.side_count(region)

    def region_price(self, region: Region[Tile], metric: PriceMetric) -> int:
        return region.size * self.metric(region, metric)

    def price(self, metric: PriceMetric) -> int:
        """Total of size * metric over every region."""
        return sum(self.region_price(region, metric) for region in self.regions.values())


def flood_fill(
    grid: Grid[Tile],
    same: Callable[[Tile, Tile], bool] = operator.eq,
) -> Flood[Tile]:
    """
    Assign a region id to every tile and record fences.

    Regions are seeded in raster order, so ids are stable for a given grid.
    Uses an explicit stack; region size is not limited by recursion depth.

    Args:
        grid: Source tiles
        same: Equivalence predicate; two adjacent tiles join a region iff it
              holds for them

    Returns:
        Flood with per-tile region ids, per-tile fences and the regions
    """
    region_ids: Grid[int] = Grid.new_default(grid.width, grid.height, UNASSIGNED)
    fences: Grid[CardinalSet] = Grid.new_default(grid.width, grid.height, CardinalSet())
    regions: dict[int, Region[Tile]] = {}

    for start in grid.addresses():
        if region_ids[start] != UNASSIGNED:
            continue
        region = Region(id=len(regions), label=grid[start])
        regions[region.id] = region
        region_ids[start] = region.id
        stack = [start]

        while stack:
            address = stack.pop()
            region.addresses.append(address)
            tile = grid[address]
            tile_fences = CardinalSet()

            for cardinal in Cardinal:
                neighbor = address.checked_add(cardinal.delta)
                if neighbor is None or not grid.contains(neighbor):
                    # off the north/west edge, or beyond the south/east edge
                    tile_fences = tile_fences.add(cardinal)
                    continue
                neighbor_id = region_ids[neighbor]
                if neighbor_id == UNASSIGNED:
                    if same(tile, grid[neighbor]):
                        region_ids[neighbor] = region.id
                        stack.append(neighbor)
                    else:
                        tile_fences = tile_fences.add(cardinal)
                elif neighbor_id != region.id:
                    tile_fences = tile_fences.add(cardinal)

            fences[address] = tile_fences

        region.addresses.sort(key=lambda a: (a.y, a.x))
        logger.debug("region %d (%s): %d tiles", region.id, region.label, region.size)

    return Flood(
        region_ids=region_ids,
        fences=fences,
        regions=regions,
    )
