"""
bfs.py - Breadth-First Search
==============================
Generator-based, level-synchronous BFS.  For every level it yields:
  1. An EdgeUpdate for each edge collected while visiting the previous
     level (edges light up one level behind their vertices)
  2. A VertexUpdate per visited vertex, under-labelled with its level
  3. A Pause before the next level starts

Each level works on a fixed-size snapshot of the frontier, so vertices
discovered mid-level always land in the next one.  A vertex is enqueued
at most once per run.  Edges collected while visiting the last level
are never emitted: the run ends with the last level's Pause.  The
generator returns a TraversalResult.
"""

import logging
from collections import deque
from typing import Dict, Generator, List, Optional

import config
from graph import Graph, Edge
from algorithms.events import EdgeUpdate, EventKind, ExecutorItem, Pause, VertexUpdate
from algorithms.traversal import TraversalResult

logger = logging.getLogger(__name__)


def bfs(
    graph: Graph,
    source: str,
    destination: Optional[str] = None,
) -> Generator[ExecutorItem, None, TraversalResult]:
    """
    Animate a breadth-first traversal of source's connected component.

    Args:
        graph       : The graph to walk.  Must not change during the run.
        source      : Starting vertex id.
        destination : Ignored; BFS always exhausts the component.

    Yields:
        VertexUpdate / EdgeUpdate / Pause items in emission order.

    Returns:
        TraversalResult with `visited` and `levels` filled in.
    """
    graph.get_vertex(source)   # fail fast on an unknown source

    result    = TraversalResult()
    frontier  = deque([source])
    visited:   set = set()
    scheduled: set = {source}
    pending_edges: List[Edge] = []
    level     = 0

    while frontier:
        for edge in _unique(pending_edges):
            yield EdgeUpdate(edge.id, EventKind.LEVEL_EDGE, edge_color=config.BFS_EDGE_COLOR)
        pending_edges = []

        for _ in range(len(frontier)):
            vertex_id = frontier.popleft()
            visited.add(vertex_id)
            result.visited.append(vertex_id)
            result.levels[vertex_id] = level

            yield VertexUpdate(
                vertex_id,
                EventKind.VISITED,
                border_color=config.BFS_BORDER_COLOR,
                inner_color=config.BFS_INNER_COLOR,
                under_label=str(level),
            )

            for neighbour in graph.get_neighbors(vertex_id):
                if neighbour.id in visited or neighbour.id in scheduled:
                    continue
                scheduled.add(neighbour.id)
                frontier.append(neighbour.id)

            pending_edges.extend(graph.get_neighbor_edges(vertex_id))

        logger.debug(f"BFS level {level} done, next frontier size {len(frontier)}")
        yield Pause(config.BFS_LEVEL_DELAY_MS, "bfs-level")
        level += 1

    return result


def _unique(edges: List[Edge]) -> List[Edge]:
    """Drop repeats, keep first-seen order."""
    seen: Dict[str, Edge] = {}
    for e in edges:
        seen.setdefault(e.id, e)
    return list(seen.values())
