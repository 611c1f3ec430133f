"""Exceptions raised by the graph store."""


class GraphError(Exception):
    """Base class for graph store precondition violations."""


class VertexNotFoundError(GraphError, KeyError):
    def __init__(self, vertex_id: str):
        super().__init__(f"No vertex with id '{vertex_id}'")
        self.vertex_id = vertex_id

    def __str__(self) -> str:
        return self.args[0]


class EdgeNotFoundError(GraphError, KeyError):
    def __init__(self, a: str, b: str):
        super().__init__(f"No edge between '{a}' and '{b}'")
        self.endpoints = (a, b)

    def __str__(self) -> str:
        return self.args[0]
