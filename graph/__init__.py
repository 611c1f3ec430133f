"""
graph/
-----
Graph store.  Public API:

    from graph import Graph, Vertex, Edge
    from graph import GraphError, VertexNotFoundError, EdgeNotFoundError
"""

from graph.vertex import Vertex
from graph.edge   import Edge
from graph.graph  import Graph
from graph.errors import GraphError, VertexNotFoundError, EdgeNotFoundError

__all__ = [
    "Vertex",
    "Edge",
    "Graph",
    "GraphError",
    "VertexNotFoundError",
    "EdgeNotFoundError",
]
