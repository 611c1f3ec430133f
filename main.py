"""
main.py - Graph Traversal Animator Flask App
=============================================
HTTP host around the execution engine.  Rendering stays in the client;
this server only produces the ordered patch stream.

Routes:
  GET  /api/algorithms       - registry cards
  POST /api/graph/import     - parse adjacency-list / matrix text into a graph
  POST /api/run              - run to completion on a virtual clock, return the timeline
  POST /api/run/stream       - run in real time, stream events as text/event-stream

Run bodies:
  {
    "graph":       {...Graph.to_dict()...}     (or "text" + "format" + "directed"),
    "algorithm":   "bfs" | "dijkstra",
    "source":      "A",
    "destination": "D",                        (Dijkstra only)
    "speed":       "normal"                    (stream only; see config.SPEED_PRESETS)
  }

No state is kept between requests.
"""

import json
import logging

from flask import Flask, Response, jsonify, request, stream_with_context

import config
from graph import Graph, GraphError, VertexNotFoundError
from algorithms import get_algorithm, list_algorithms
from engine import ExecutionController, RealTimePacing, Recorder


app = Flask(__name__)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(VertexNotFoundError)
def handle_missing_vertex(e):
    return jsonify({"error": str(e)}), 404


@app.errorhandler(GraphError)
def handle_graph_error(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(ValueError)
def handle_bad_value(e):
    return jsonify({"error": str(e)}), 400


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object body")
    return data


def _graph_from(data: dict) -> Graph:
    """Build a graph from either a serialised graph or import text."""
    if "graph" in data:
        return Graph.from_dict(data["graph"])

    text = data.get("text", "")
    fmt  = data.get("format", "adjacency")
    directed = bool(data.get("directed", False))
    if fmt == "adjacency":
        return Graph.from_adjacency_list(text, directed=directed)
    if fmt == "matrix":
        return Graph.from_adjacency_matrix(text, directed=directed)
    raise ValueError(f"Unknown format: {fmt}")


def _run_args(data: dict, graph: Graph):
    algo_key = data.get("algorithm", "bfs")
    info = get_algorithm(algo_key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {algo_key}")

    source = data.get("source")
    if not source:
        raise ValueError("Missing 'source'")
    graph.get_vertex(source)

    destination = data.get("destination") if info.needs_destination else None
    if info.needs_destination:
        if not destination:
            raise ValueError(f"{info.label} needs a 'destination'")
        graph.get_vertex(destination)

    return algo_key, source, destination


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify([a.to_dict() for a in list_algorithms()])


# ---------------------------------------------------------------------------
# API: Graph Import
# ---------------------------------------------------------------------------
@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    g = _graph_from(_body())
    return jsonify(g.to_dict())


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data  = _body()
    graph = _graph_from(data)
    algo_key, source, destination = _run_args(data, graph)

    rec = Recorder(graph)
    rec.run(algo_key, source, destination)
    return jsonify(rec.export())


@app.route("/api/run/stream", methods=["POST"])
def api_run_stream():
    data  = _body()
    graph = _graph_from(data)
    algo_key, source, destination = _run_args(data, graph)
    pacing = RealTimePacing(data.get("speed", config.PACING_SPEED))

    controller = ExecutionController(graph, algo_key, source, destination, pacing=pacing)

    def stream():
        try:
            for event in controller.iter_events():
                yield f"data: {json.dumps(event.to_dict())}\n\n"
        except GraphError as e:
            # headers are already sent, so the failure travels in-band
            yield f"event: error\ndata: {json.dumps({'error': str(e)})}\n\n"
            return
        summary = controller.summary
        done = {
            "events":    summary.events_emitted,
            "cancelled": summary.cancelled,
            "result":    summary.result.to_dict() if summary.result else None,
        }
        yield f"event: done\ndata: {json.dumps(done)}\n\n"

    return Response(stream_with_context(stream()), mimetype="text/event-stream")


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=False, port=5000)
