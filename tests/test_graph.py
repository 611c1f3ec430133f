"""Unit tests for the graph store."""

import pytest

from graph import Edge, EdgeNotFoundError, Graph, GraphError, Vertex, VertexNotFoundError


class TestAdjacency:
    """Neighbour and edge lookups."""

    def test_neighbors_in_insertion_order(self, diamond):
        """Neighbours come back in the order their edges were added."""
        assert [v.id for v in diamond.get_neighbors("A")] == ["B", "C"]
        assert [v.id for v in diamond.get_neighbors("D")] == ["B", "C"]

    def test_neighbor_edges(self, diamond):
        """Incident edges of an undirected vertex include both directions."""
        assert [e.id for e in diamond.get_neighbor_edges("B")] == ["AB", "BD"]

    def test_get_edge_either_direction(self, diamond):
        """Undirected edges are found from both ends."""
        assert diamond.get_edge("A", "B").id == "AB"
        assert diamond.get_edge("B", "A").id == "AB"

    def test_get_edge_missing_raises(self, diamond):
        """Non-adjacent pairs are a precondition violation."""
        with pytest.raises(EdgeNotFoundError):
            diamond.get_edge("A", "D")

    def test_edge_not_found_is_graph_error(self, diamond):
        """Callers can catch the whole family through GraphError."""
        with pytest.raises(GraphError):
            diamond.get_edge("B", "C")

    def test_get_other_end(self, diamond):
        """Other end of an edge, from either endpoint."""
        edge = diamond.get_edge("A", "C")
        assert diamond.get_other_end(edge, "A").id == "C"
        assert diamond.get_other_end(edge, "C").id == "A"

    def test_get_other_end_not_an_endpoint(self, diamond):
        """Asking from a vertex that is not on the edge fails."""
        with pytest.raises(GraphError):
            diamond.get_other_end(diamond.get_edge("A", "C"), "B")

    def test_unknown_vertex_raises(self, diamond):
        """Lookups on unknown vertices raise VertexNotFoundError."""
        with pytest.raises(VertexNotFoundError):
            diamond.get_neighbors("Z")
        with pytest.raises(VertexNotFoundError):
            diamond.get_vertex("Z")

    def test_directed_lists_outgoing_only(self):
        """In a directed graph only the tail sees the edge."""
        g = Graph(directed=True)
        g.create_vertex("A")
        g.create_vertex("B")
        g.create_edge("A", "B", weight=2)
        assert [v.id for v in g.get_neighbors("A")] == ["B"]
        assert g.get_neighbors("B") == []
        with pytest.raises(EdgeNotFoundError):
            g.get_edge("B", "A")

    def test_self_loop_listed_once(self):
        """A self-loop appears once in the adjacency of its vertex."""
        g = Graph()
        g.create_vertex("A")
        g.create_edge("A", "A")
        assert g.degree("A") == 1


class TestMutation:
    """Adding and removing vertices and edges."""

    def test_create_edge_updates_existing_pair(self, diamond):
        """A second edge on the same pair updates the weight instead."""
        edge = diamond.create_edge("B", "A", weight=7)
        assert edge.id == "AB"
        assert diamond.get_edge("A", "B").weight == 7
        assert diamond.edge_count() == 4

    def test_add_edge_with_other_direction_rejected(self, diamond):
        with pytest.raises(GraphError):
            diamond.add_edge(Edge("A", "D", directed=True))

    def test_update_weight_must_be_number(self, diamond):
        with pytest.raises(ValueError):
            diamond.create_edge("A", "B", weight="7")
        assert diamond.get_edge("A", "B").weight == 1

    def test_add_parallel_edge_rejected(self, diamond):
        """add_edge refuses a second edge on a connected pair."""
        with pytest.raises(GraphError):
            diamond.add_edge(Edge("A", "B"))

    def test_negative_weight_rejected(self, diamond):
        """Negative weights are refused when the edge is created."""
        with pytest.raises(ValueError):
            diamond.create_edge("A", "D", weight=-1)

    def test_edge_to_unknown_vertex(self, diamond):
        """Edges need both endpoints to exist."""
        with pytest.raises(VertexNotFoundError):
            diamond.create_edge("A", "Z")

    def test_duplicate_vertex_rejected(self, diamond):
        with pytest.raises(GraphError):
            diamond.add_vertex(Vertex("A"))

    def test_remove_vertex_drops_edges(self, diamond):
        """Removing a vertex removes every edge touching it."""
        diamond.remove_vertex("B")
        assert diamond.edge_count() == 2
        assert [v.id for v in diamond.get_neighbors("A")] == ["C"]
        assert [v.id for v in diamond.get_neighbors("D")] == ["C"]

    def test_remove_edge(self, diamond):
        diamond.remove_edge("AB")
        assert [v.id for v in diamond.get_neighbors("A")] == ["C"]
        with pytest.raises(EdgeNotFoundError):
            diamond.get_edge("A", "B")


class TestImport:
    """Text import and serialisation."""

    def test_adjacency_list_with_weights(self):
        """Weights in parentheses, plain targets default to 1."""
        g = Graph.from_adjacency_list("A: B(3) C\nB: D(2)\n# comment\nE")
        assert g.vertex_ids() == ["A", "B", "C", "D", "E"]
        assert g.get_edge("A", "B").weight == 3
        assert g.get_edge("A", "C").weight == 1
        assert g.get_edge("B", "D").weight == 2
        assert g.degree("E") == 0

    def test_adjacency_list_undirected_pair_once(self):
        """A pair listed from both ends becomes one edge."""
        g = Graph.from_adjacency_list("A: B(2)\nB: A(2)")
        assert g.edge_count() == 1

    def test_adjacency_list_arrow_syntax(self):
        g = Graph.from_adjacency_list("0 -> 1, 2", directed=True)
        assert [v.id for v in g.get_neighbors("0")] == ["1", "2"]

    def test_adjacency_matrix_with_labels(self):
        """A non-numeric first row names the vertices."""
        text = "A B C\n0 4 0\n4 0 8\n0 8 0"
        g = Graph.from_adjacency_matrix(text)
        assert g.vertex_ids() == ["A", "B", "C"]
        assert g.edge_count() == 2
        assert g.get_edge("B", "C").weight == 8

    def test_adjacency_matrix_not_square(self):
        with pytest.raises(ValueError):
            Graph.from_adjacency_matrix("0 1\n1 0 1")

    def test_dict_round_trip(self, diamond):
        """to_dict / from_dict preserves ids, weights and adjacency order."""
        copy = Graph.from_dict(diamond.to_dict())
        assert copy.vertex_ids() == diamond.vertex_ids()
        assert copy.get_edge("C", "D").weight == 1
        assert [e.id for e in copy.get_neighbor_edges("A")] == ["AB", "AC"]

    def test_dict_edge_direction_must_match_graph(self):
        """An undirected edge inside a directed graph is refused on load."""
        data = {
            "directed": True,
            "vertices": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
            "edges": [
                {"id": "BA", "source": "B", "target": "A", "directed": False},
                {"id": "BC", "source": "B", "target": "C"},
            ],
        }
        with pytest.raises(GraphError):
            Graph.from_dict(data)

    def test_dict_edges_default_to_graph_direction(self):
        g = Graph.from_dict({
            "directed": True,
            "vertices": [{"id": "A"}, {"id": "B"}],
            "edges": [{"id": "AB", "source": "A", "target": "B"}],
        })
        assert g.get_edge_by_id("AB").directed
        assert g.get_neighbors("B") == []

    @pytest.mark.parametrize("weight, expected", [("3", 3), ("2.5", 2.5), (4, 4)])
    def test_dict_numeric_weights(self, weight, expected):
        """JSON weights given as numeric strings are converted."""
        g = Graph.from_dict({
            "vertices": [{"id": "A"}, {"id": "B"}],
            "edges": [{"source": "A", "target": "B", "weight": weight}],
        })
        assert g.get_edge("A", "B").weight == expected

    @pytest.mark.parametrize("weight", [None, "heavy", True, [1], "-2", "nan"])
    def test_dict_bad_weight_rejected(self, weight):
        with pytest.raises(ValueError):
            Graph.from_dict({
                "vertices": [{"id": "A"}, {"id": "B"}],
                "edges": [{"source": "A", "target": "B", "weight": weight}],
            })


class TestGenerators:
    """Seeded graph generators."""

    def test_random_is_seeded(self):
        """Same seed, same edges (edge ids are random, so compare endpoints)."""

        def shape(g):
            return [(e.source, e.target, e.weight) for e in g.edges.values()]

        a = Graph.generate_random(num_vertices=8, seed=7)
        b = Graph.generate_random(num_vertices=8, seed=7)
        assert shape(a) == shape(b)

    def test_random_connected_has_spanning_edges(self):
        g = Graph.generate_random(num_vertices=10, edge_probability=0.0, seed=1)
        assert g.edge_count() == 9

    def test_grid_shape(self):
        g = Graph.generate_grid(rows=3, cols=4)
        assert g.vertex_count() == 12
        assert g.edge_count() == 3 * 3 + 2 * 4
        assert g.degree("1_1") == 4
