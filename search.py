"""
Graph search over grid-derived nodes.

Nodes are any hashable value chosen by the caller (a bare GridAddress, or an
address plus heading when turning has a cost). Edges come from a caller
supplied successor function, so the grid itself never needs to know about the
search.

- dijkstra(): weighted shortest paths, keeping every tied predecessor so that
  all optimal routes can be recovered
- astar(): single weighted shortest path guided by a heuristic
- find_path(): one unweighted path by depth-first search
- count_paths(): count goals reached (distinct endpoints) or distinct full paths
- path_cardinals(): per-address directions of a path, for box-drawing overlays
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Hashable, Iterable, Iterator, TypeVar

from geometry import Cardinal, CardinalSet, GridAddress

logger = logging.getLogger(__name__)

Node = TypeVar("Node", bound=Hashable)

Successors = Callable[[Node], Iterable[tuple[Node, int]]]
Neighbors = Callable[[Node], Iterable[Node]]
Goal = Callable[[Node], bool]


class NoPathError(LookupError):
    """Raised by puzzle drivers when an input has no route between its endpoints."""


# =============================================================================
# Dijkstra with Tied Predecessors
# =============================================================================


class ShortestPaths(Generic[Node]):
    """
    Result of dijkstra().

    parents maps every reached node to all predecessors that achieve its
    minimal cost, forming a DAG of optimal routes back to `start`.
    """

    def __init__(
        self,
        start: Node,
        cost: int,
        goals: list[Node],
        costs: dict[Node, int],
        parents: dict[Node, list[Node]],
    ):
        self.start = start
        self.cost = cost
        self.goals = goals
        self.costs = costs
        self.parents = parents

    def path(self, goal: Node | None = None) -> list[Node]:
        """
        One optimal route from start to `goal` (default: the first goal found).

        Follows the first recorded parent at every step.
        """
        node = self.goals[0] if goal is None else goal
        path = [node]
        while node != self.start:
            node = self.parents[node][0]
            path.append(node)
        path.reverse()
        return path

    def optimal_nodes(self) -> set[Node]:
        """Every node that lies on at least one optimal route to any tied goal."""
        seen: set[Node] = set(self.goals)
        stack = list(self.goals)
        while stack:
            node = stack.pop()
            for parent in self.parents[node]:
                if parent not in seen:
                    seen.add(parent)
                    stack.append(parent)
        return seen

    def optimal_keys(self, key: Callable[[Node], Hashable]) -> set[Hashable]:
        """Project optimal_nodes() through `key`, e.g. to collapse headings into addresses."""
        return {key(node) for node in self.optimal_nodes()}


def dijkstra(start: Node, successors: Successors[Node], is_goal: Goal[Node]) -> ShortestPaths[Node] | None:
    """
    Minimum-cost search from `start`, tracking every tied predecessor.

    A strictly cheaper route to a node replaces its parent list; a route of
    equal cost from a new predecessor is appended to it. Goal nodes are not
    expanded. The search continues until the frontier is costlier than the
    best goal, so every goal tied at the minimum is collected.

    Args:
        start: Initial node
        successors: Yields (next_node, step_cost) pairs; costs must be >= 0
        is_goal: Goal test; several nodes may satisfy it (e.g. one per heading)

    Returns:
        ShortestPaths, or None if no goal is reachable
    """
    costs: dict[Node, int] = {start: 0}
    parents: dict[Node, list[Node]] = {start: []}
    finalized: set[Node] = set()
    sequence = itertools.count()
    heap: list[tuple[int, int, Node]] = [(0, next(sequence), start)]

    best: int | None = None
    goals: list[Node] = []

    while heap:
        cost, _, node = heapq.heappop(heap)
        if node in finalized or cost > costs[node]:
            continue
        if best is not None and cost > best:
            break
        finalized.add(node)

        if is_goal(node):
            best = cost
            goals.append(node)
            continue

        for neighbor, step in successors(node):
            if step < 0:
                raise ValueError(f"Negative edge cost {step} from {node!r} to {neighbor!r}")
            new_cost = cost + step
            known = costs.get(neighbor)
            if known is None or new_cost < known:
                costs[neighbor] = new_cost
                parents[neighbor] = [node]
                heapq.heappush(heap, (new_cost, next(sequence), neighbor))
            elif new_cost == known and node not in parents[neighbor]:
                parents[neighbor].append(node)

    logger.debug("dijkstra finalized %d nodes, %d goal(s) at cost %s", len(finalized), len(goals), best)

    if best is None:
        return None
    return ShortestPaths(start, best, goals, costs, parents)


# =============================================================================
# A*
# =============================================================================


def astar(
    start: Node,
    successors: Successors[Node],
    heuristic: Callable[[Node], int],
    is_goal: Goal[Node],
) -> tuple[list[Node], int] | None:
    """
    Single shortest path guided by an admissible `heuristic`.

    Returns:
        (path from start to goal, total cost), or None if the goal is unreachable
    """
    sequence = itertools.count()
    heap: list[tuple[int, int, Node]] = [(heuristic(start), next(sequence), start)]
    g_score: dict[Node, int] = {start: 0}
    parent: dict[Node, Node] = {}

    while heap:
        f_cost, _, node = heapq.heappop(heap)
        g = g_score[node]
        if f_cost - heuristic(node) > g:
            continue  # stale heap entry
        if is_goal(node):
            path = [node]
            while node in parent:
                node = parent[node]
                path.append(node)
            path.reverse()
            return path, g
        for neighbor, step in successors(node):
            tentative = g + step
            if tentative >= g_score.get(neighbor, tentative + 1):
                continue
            g_score[neighbor] = tentative
            parent[neighbor] = node
            heapq.heappush(heap, (tentative + heuristic(neighbor), next(sequence), neighbor))

    return None


# =============================================================================
# Unweighted Depth-First Search
# =============================================================================


def _within(max_depth: int | None, depth: int) -> bool:
    return max_depth is None or depth <= max_depth


def find_path(
    start: Node,
    neighbors: Neighbors[Node],
    is_goal: Goal[Node],
    max_depth: int | None = None,
) -> list[Node] | None:
    """
    Depth-first search for any path from `start` to a goal.

    Nodes more than `max_depth` steps from `start` are treated as absent.
    A node is explored once; under a depth cap it is explored again when
    reached in fewer steps, since that visit has more depth left.

    Returns:
        The path (start first), or None
    """
    if is_goal(start):
        return [start]
    path = [start]
    depths = {start: 0}
    stack: list[Iterator[Node]] = [iter(neighbors(start))]

    while stack:
        depth = len(path)
        children = stack[-1] if _within(max_depth, depth) else iter(())
        for node in children:
            if node in depths and (max_depth is None or depths[node] <= depth):
                continue
            depths[node] = depth
            path.append(node)
            if is_goal(node):
                return path
            stack.append(iter(neighbors(node)))
            break
        else:
            stack.pop()
            path.pop()

    return None


@dataclass
class PathCount(Generic[Node]):
    """Result of count_paths(): the count plus every node the search touched."""

    count: int
    visited: set[Node] = field(default_factory=set)


@dataclass
class _Frame(Generic[Node]):
    node: Node
    depth: int
    children: Iterator[Node]
    total: int = 0


def count_paths(
    start: Node,
    neighbors: Neighbors[Node],
    is_goal: Goal[Node],
    distinct_paths: bool,
    max_depth: int | None = None,
) -> PathCount[Node]:
    """
    Count routes from `start` to goal nodes. Goals are not expanded further.

    Args:
        distinct_paths: False shares one visited set across the whole search,
                        so each reachable goal is counted once (distinct
                        endpoints). True counts every distinct full path;
                        sub-paths are memoized, and `neighbors` must then be
                        acyclic (a cycle raises ValueError).
        max_depth: Nodes more than this many steps from `start` are treated
                   as absent; None for no limit
    """
    visited: set[Node] = {start}

    if not distinct_paths:
        goals: set[Node] = set()
        depths = {start: 0}
        pending = [(start, 0)]
        while pending:
            node, depth = pending.pop()
            if depth > depths[node]:
                continue  # superseded by a shallower visit
            if is_goal(node):
                goals.add(node)
                continue
            if not _within(max_depth, depth + 1):
                continue
            for child in neighbors(node):
                known = depths.get(child)
                if known is None or (max_depth is not None and depth + 1 < known):
                    depths[child] = depth + 1
                    visited.add(child)
                    pending.append((child, depth + 1))
        return PathCount(len(goals), visited)

    if is_goal(start):
        return PathCount(1, visited)

    # memo keys carry the depth under a cap, since the count below a node
    # depends on how many steps remain
    def key(node: Node, depth: int) -> Hashable:
        return node if max_depth is None else (node, depth)

    def frame(node: Node, depth: int) -> _Frame[Node]:
        children = iter(neighbors(node)) if _within(max_depth, depth + 1) else iter(())
        return _Frame(node, depth, children)

    counts: dict[Hashable, int] = {}
    on_path: set[Node] = {start}
    frames: list[_Frame[Node]] = [frame(start, 0)]

    while frames:
        top = frames[-1]
        child_depth = top.depth + 1
        for child in top.children:
            visited.add(child)
            child_key = key(child, child_depth)
            if child_key in counts:
                top.total += counts[child_key]
            elif child in on_path:
                raise ValueError(f"Cycle through {child!r}; distinct path counting needs acyclic neighbors")
            elif is_goal(child):
                counts[child_key] = 1
                top.total += 1
            else:
                on_path.add(child)
                frames.append(frame(child, child_depth))
                break
        else:
            frames.pop()
            on_path.discard(top.node)
            counts[key(top.node, top.depth)] = top.total
            if frames:
                frames[-1].total += top.total

    return PathCount(counts[key(start, 0)], visited)


# =============================================================================
# Path Annotation
# =============================================================================


def path_cardinals(
    path: Iterable[Node],
    key: Callable[[Node], GridAddress] = lambda node: node,  # type: ignore[assignment, return-value]
) -> dict[GridAddress, CardinalSet]:
    """
    For each address on `path`, the directions in which the path leaves or enters it.

    Consecutive nodes at the same address (e.g. turning in place) add nothing.
    """
    out: dict[GridAddress, CardinalSet] = {}
    previous: GridAddress | None = None
    for node in path:
        here = key(node)
        out.setdefault(here, CardinalSet())
        if previous is not None:
            direction = Cardinal.between(previous, here)
            if direction is not None:
                out[previous] = out[previous].add(direction)
                out[here] = out[here].add(direction.opposite())
        previous = here
    return out
