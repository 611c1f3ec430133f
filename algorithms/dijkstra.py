"""
dijkstra.py - Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over an indexed priority queue.

Yields, in order:
  1. Source label, then a long opening Pause
  2. Per round: pop the cheapest pending node
       • destination  ->  destination styling, stop searching
       • otherwise    ->  finalised styling + its tree edge (skipped for the source)
     then probe every edge to an unvisited neighbour (always tinted),
     record / improve its cost and label, and Pause
  3. Backtracking: walk the source links from the destination, styling
     each path edge and vertex with a Pause per step, then the source

Ties on cost pop in insertion order; an equal-cost alternative never
replaces the path found first.  Unreachable destination is a normal
ending: no backtracking events at all.

Correctness note: Dijkstra requires non-negative weights.  The graph
store refuses negative ones when edges are added.
"""

import logging
from typing import Dict, Generator, Optional

import config
from graph import Graph
from algorithms.events import EdgeUpdate, EventKind, ExecutorItem, Pause, VertexUpdate
from algorithms.traversal import IndexedPriorityQueue, NodeArena, TraversalResult

logger = logging.getLogger(__name__)


def dijkstra(
    graph: Graph,
    source: str,
    destination: Optional[str] = None,
) -> Generator[ExecutorItem, None, TraversalResult]:
    if destination is None:
        raise ValueError("Dijkstra needs a destination vertex")
    graph.get_vertex(source)
    graph.get_vertex(destination)

    primary, secondary, dark = config.PRIMARY_ACCENT, config.SECONDARY_ACCENT, config.DARK_ACCENT

    result  = TraversalResult()
    arena   = NodeArena()
    pending: IndexedPriorityQueue[str] = IndexedPriorityQueue()
    visited: set = set()
    cost:   Dict[str, float] = {}

    pending.push(source, 0, arena.add(source, 0))

    yield VertexUpdate(source, EventKind.SOURCE_LABEL, under_label="Source : 0 from self")
    yield Pause(config.DIJKSTRA_START_DELAY_MS, "dijkstra-start")

    root: Optional[int] = None

    # --- main loop ---
    while pending:
        vertex_id, node_cost, index = pending.pop()
        parent = arena.source_of(index)

        if vertex_id == destination:
            came_from = parent.vertex_id if parent else "self"
            yield VertexUpdate(
                vertex_id,
                EventKind.DESTINATION,
                under_label=f"Destination : {node_cost} from {came_from}",
            )
            root = index
            break

        if parent is not None:
            yield VertexUpdate(vertex_id, EventKind.FINALIZED, border_color=dark.dark, inner_color=dark.light)
            tree_edge = graph.get_edge(parent.vertex_id, vertex_id)
            yield EdgeUpdate(tree_edge.id, EventKind.TREE_EDGE, edge_color=dark.dark, label_background=dark.light)

        visited.add(vertex_id)
        result.visited.append(vertex_id)

        # -- relax neighbours --
        for edge in graph.get_neighbor_edges(vertex_id):
            neighbour = graph.get_other_end(edge, vertex_id).id
            if neighbour in visited:
                continue

            candidate = edge.weight + node_cost

            yield EdgeUpdate(edge.id, EventKind.PROBE_EDGE, edge_color=primary.dark, label_background=primary.light)
            if neighbour != destination:
                yield VertexUpdate(neighbour, EventKind.FRONTIER, border_color=primary.dark, inner_color=primary.light)

            previous = cost.get(neighbour)
            if previous is None:
                cost[neighbour] = candidate
                yield VertexUpdate(neighbour, EventKind.DISTANCE_LABEL, under_label=f"{candidate} from {vertex_id}")
                pending.push(neighbour, candidate, arena.add(neighbour, candidate, index))
            elif candidate < previous:
                logger.debug(f"Relax {vertex_id}->{neighbour}: {previous} -> {candidate}")
                cost[neighbour] = candidate
                pending.decrease(neighbour, candidate, arena.add(neighbour, candidate, index))
                yield VertexUpdate(neighbour, EventKind.DISTANCE_LABEL, under_label=f"{candidate} from {vertex_id}")

        yield Pause(config.DIJKSTRA_STEP_DELAY_MS, "dijkstra-step")

    result.costs = dict(cost)
    result.costs[source] = 0

    if root is None:
        logger.info(f"Dijkstra: '{destination}' is not reachable from '{source}'")
        return result

    # --- backtracking ---
    chain = arena.chain(root)
    result.path = [arena[i].vertex_id for i in reversed(chain)]
    result.cost = arena[root].cost

    for i in chain[:-1]:
        node = arena[i]
        parent = arena.source_of(i)
        path_edge = graph.get_edge(parent.vertex_id, node.vertex_id)
        yield EdgeUpdate(path_edge.id, EventKind.PATH_EDGE, edge_color=secondary.dark, label_background=secondary.light)
        yield VertexUpdate(node.vertex_id, EventKind.PATH_VERTEX, border_color=secondary.dark, inner_color=secondary.light)
        yield Pause(config.BACKTRACK_DELAY_MS, "backtrack")

    yield VertexUpdate(source, EventKind.PATH_VERTEX, border_color=secondary.dark, inner_color=secondary.light)
    return result
