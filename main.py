"""
main.py — Graph Algorithm Trace Server
======================================
JSON API behind the visualizer's browser client.

Routes:
  GET  /api/health             – liveness probe
  GET  /api/tracers            – registry metadata + pseudocode
  GET  /api/graph              – current graph
  PUT  /api/graph              – replace the graph (validated)
  POST /api/graph/generate     – random demo graph
  POST /api/graph/import       – import from adjacency-list text
  POST /api/trace              – run a tracer, cursor back to 0
  GET  /api/step               – current frame
  POST /api/step/next          – advance one frame
  POST /api/step/prev          – rewind one frame
  POST /api/step/goto          – jump to frame N (clamped)
  POST /api/step/rewind        – jump to the first frame
  POST /api/step/end           – jump to the last frame
  POST /api/step/play          – toggle play/pause
  POST /api/config/speed       – set the autoplay speed preset
  GET  /api/trace/export       – the whole trace as JSON

State management:
  The Flask session holds only the inputs of a trace (graph, tracer key,
  source) plus the cursor.  Traces are deterministic and cheap for
  graphs of this size, so every request re-runs the tracer and indexes
  into the result instead of storing frames in the cookie.  Editing the
  graph drops the trace; the client must POST /api/trace again.
"""

import logging
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from config import Config
from engine import Stepper, SPEED_PRESETS
from graph import Graph, GraphError
from tracers import TraceError, get_tracer, list_tracers, reconstruct_path, run_tracer

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.config.from_object(Config)
app.config.from_prefixed_env("TRACEVIZ")


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or app.config["LOG_LEVEL"]).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_graph() -> Graph:
    """Deserialise graph from session, or create the demo graph."""
    if "graph" not in session:
        demo = Graph.generate_random(
            num_nodes=app.config["DEMO_NODE_COUNT"],
            seed=app.config["DEMO_SEED"],
        )
        session["graph"] = demo.to_dict()
        set_state(source=demo.node_ids()[0] if demo.node_count() else None)
    return Graph.from_dict(session["graph"])


def save_graph(graph: Graph) -> None:
    """Store a new graph and invalidate whatever trace was loaded."""
    session["graph"] = graph.to_dict()
    ids = graph.node_ids()
    set_state(tracer=None, current_step=0, is_playing=False, source=ids[0] if ids else None)


def get_state() -> Dict[str, Any]:
    return {
        "tracer":       session.get("tracer"),
        "source":       session.get("source"),
        "current_step": session.get("current_step", 0),
        "is_playing":   session.get("is_playing", False),
        "speed":        session.get("speed", app.config["DEFAULT_SPEED"]),
    }


def set_state(**kwargs) -> None:
    for k, v in kwargs.items():
        session[k] = v


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _check_size(graph: Graph) -> None:
    if graph.node_count() > app.config["MAX_NODES"]:
        raise GraphError(
            f"Graph has {graph.node_count()} nodes; the limit is {app.config['MAX_NODES']}"
        )


# ---------------------------------------------------------------------------
# Trace / cursor helpers
# ---------------------------------------------------------------------------
def _load_stepper() -> Stepper:
    """Re-run the session's tracer and position a Stepper on the saved cursor."""
    state = get_state()
    if not state["tracer"]:
        raise TraceError("No trace loaded; POST /api/trace first")
    steps = run_tracer(state["tracer"], get_graph(), state["source"])
    stepper = Stepper(speed=state["speed"])
    stepper.load(steps, index=state["current_step"])
    return stepper


def _paths(final_step) -> Dict[str, List[str]]:
    return {nid: reconstruct_path(final_step.previous, nid) for nid in final_step.visited}


def _frame_payload(stepper: Stepper) -> Dict[str, Any]:
    set_state(current_step=max(stepper.current_idx, 0))
    step = stepper.current_step
    return {
        "tracer":       get_state()["tracer"],
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_steps,
        "is_final":     stepper.at_end,
        "step":         step.to_dict() if step is not None else None,
    }


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(GraphError)
@app.errorhandler(TraceError)
def handle_bad_input(exc: Exception):
    logger.warning("rejected request %s %s: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(HTTPException)
def handle_http_error(exc: HTTPException):
    return jsonify({"error": exc.description}), exc.code


# ---------------------------------------------------------------------------
# API: Meta
# ---------------------------------------------------------------------------
@app.route("/api/health")
def api_health():
    return jsonify({"status": "ok"})


@app.route("/api/tracers")
def api_tracers():
    return jsonify({"tracers": [t.to_dict() for t in list_tracers()]})


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph", methods=["GET"])
def api_graph_get():
    graph = get_graph()
    return jsonify({"graph": graph.to_dict(), "source": get_state()["source"]})


@app.route("/api/graph", methods=["PUT"])
def api_graph_put():
    g = Graph.from_dict(_json_body())
    g.validate()
    _check_size(g)
    save_graph(g)
    logger.info("graph replaced: %d nodes, %d edges", g.node_count(), g.edge_count())
    return jsonify({"graph": g.to_dict(), "node_ids": g.node_ids()})


@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = _json_body()
    num_nodes = data.get("nodes", app.config["DEMO_NODE_COUNT"])
    if isinstance(num_nodes, bool) or not isinstance(num_nodes, int) or num_nodes < 1:
        raise GraphError("'nodes' must be a positive integer")
    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise GraphError("'seed' must be an integer")
    g = Graph.generate_random(num_nodes=num_nodes, seed=seed)
    _check_size(g)
    save_graph(g)
    logger.info("demo graph generated: %d nodes, %d edges", g.node_count(), g.edge_count())
    return jsonify({"graph": g.to_dict(), "node_ids": g.node_ids()})


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    g = Graph.from_adjacency_list(_json_body().get("text", ""))
    g.validate()
    _check_size(g)
    save_graph(g)
    logger.info("graph imported: %d nodes, %d edges", g.node_count(), g.edge_count())
    return jsonify({"graph": g.to_dict(), "node_ids": g.node_ids()})


# ---------------------------------------------------------------------------
# API: Run Tracer
# ---------------------------------------------------------------------------
@app.route("/api/trace", methods=["POST"])
def api_trace():
    data  = _json_body()
    key   = data.get("tracer", "dijkstra")
    info  = get_tracer(key)
    if info is None:
        raise TraceError(f"Unknown tracer: {key}")

    graph  = get_graph()
    source = data.get("source") or get_state()["source"]
    if info.needs_source and source is None and graph.node_count():
        raise TraceError("This tracer needs a source node")

    steps = run_tracer(key, graph, source)
    set_state(tracer=key, source=source, current_step=0, is_playing=False)
    logger.info("traced %s (source=%s): %d frames", key, source, len(steps))

    stepper = Stepper(speed=get_state()["speed"])
    stepper.load(steps)
    return jsonify(_frame_payload(stepper))


@app.route("/api/trace/export")
def api_trace_export():
    stepper = _load_stepper()
    state   = get_state()
    graph   = get_graph()
    payload = {
        "tracer": state["tracer"],
        "source": state["source"],
        "graph":  graph.to_dict(),
        "steps":  [s.to_dict() for s in stepper.steps],
    }
    if get_tracer(state["tracer"]).needs_source and stepper.steps:
        payload["paths"] = _paths(stepper.steps[-1])
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step", methods=["GET"])
def api_step_current():
    return jsonify(_frame_payload(_load_stepper()))


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    stepper = _load_stepper()
    stepper.next_step()
    return jsonify(_frame_payload(stepper))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    stepper = _load_stepper()
    stepper.prev_step()
    return jsonify(_frame_payload(stepper))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    idx = _json_body().get("index", 0)
    if not isinstance(idx, int):
        raise TraceError("'index' must be an integer")
    stepper = _load_stepper()
    stepper.goto_step(idx)
    return jsonify(_frame_payload(stepper))


@app.route("/api/step/rewind", methods=["POST"])
def api_step_rewind():
    stepper = _load_stepper()
    stepper.rewind()
    return jsonify(_frame_payload(stepper))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    stepper = _load_stepper()
    stepper.jump_to_end()
    return jsonify(_frame_payload(stepper))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    state = get_state()
    set_state(is_playing=not state["is_playing"])
    return jsonify({
        "is_playing": not state["is_playing"],
        "interval":   SPEED_PRESETS.get(state["speed"], SPEED_PRESETS["medium"]),
    })


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    speed = _json_body().get("speed", "medium")
    if speed not in SPEED_PRESETS:
        raise TraceError(f"Unknown speed preset: {speed}")
    set_state(speed=speed)
    return jsonify({"speed": speed, "interval": SPEED_PRESETS[speed]})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    configure_logging()
    logger.info("Graph Algorithm Trace Server on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
