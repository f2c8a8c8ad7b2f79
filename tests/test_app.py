"""
Integration tests for the Flask JSON API, driven through the test client.
"""

import importlib
import logging

import pytest


SCENARIO = {
    "nodes": [
        {"id": "A", "label": "A", "x": 0, "y": 0},
        {"id": "B", "label": "B", "x": 100, "y": 0},
        {"id": "C", "label": "C", "x": 0, "y": 100},
        {"id": "D", "label": "D", "x": 100, "y": 100},
    ],
    "edges": [
        {"from": "A", "to": "B", "weight": 4},
        {"from": "A", "to": "C", "weight": 2},
        {"from": "C", "to": "B", "weight": 1},
        {"from": "B", "to": "D", "weight": 3},
        {"from": "C", "to": "D", "weight": 5},
    ],
}


@pytest.fixture
def scenario_client(client):
    resp = client.put("/api/graph", json=SCENARIO)
    assert resp.status_code == 200
    return client


def _trace(client, tracer, **extra):
    resp = client.post("/api/trace", json={"tracer": tracer, **extra})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


# =========================================================================
# Meta & graph
# =========================================================================


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_tracers_listing(client):
    tracers = client.get("/api/tracers").get_json()["tracers"]

    assert [t["key"] for t in tracers] == ["dijkstra", "warshall"]
    assert tracers[0]["needs_source"] is True
    assert tracers[1]["needs_source"] is False
    assert tracers[0]["pseudocode"][0].startswith("def dijkstra")


def test_default_graph_is_the_demo_graph(client):
    body = client.get("/api/graph").get_json()

    assert len(body["graph"]["nodes"]) == 5
    assert body["source"] == "0"


def test_put_graph_returns_normalised_edges(scenario_client):
    body = scenario_client.get("/api/graph").get_json()

    assert body["source"] == "A"
    assert body["graph"]["edges"][0]["source"] == "A"
    assert body["graph"]["edges"][0]["target"] == "B"


def test_generate_graph(client):
    body = client.post("/api/graph/generate", json={"nodes": 6, "seed": 1}).get_json()

    assert body["node_ids"] == ["0", "1", "2", "3", "4", "5"]


def test_import_graph(client):
    resp = client.post("/api/graph/import", json={"text": "A: B(4) C(2)\nC: B(1) D(5)\nB: D(3)"})

    assert resp.status_code == 200
    assert resp.get_json()["node_ids"] == ["A", "B", "C", "D"]


# =========================================================================
# Dijkstra playback
# =========================================================================


def test_dijkstra_trace_starts_at_init(scenario_client):
    body = _trace(scenario_client, "dijkstra", source="A")

    assert body["total_steps"] == 22
    assert body["current_step"] == 0
    assert body["is_final"] is False
    assert body["step"]["description"].startswith("INITIALIZATION")
    assert body["step"]["distances"] == {"A": 0, "B": "∞", "C": "∞", "D": "∞"}
    assert body["step"]["queue"] == [{"id": "A", "value": 0}]


def test_step_navigation(scenario_client):
    _trace(scenario_client, "dijkstra", source="A")

    body = scenario_client.post("/api/step/next").get_json()
    assert body["current_step"] == 1
    assert body["step"]["current"] == "A"

    body = scenario_client.post("/api/step/prev").get_json()
    assert body["current_step"] == 0

    body = scenario_client.post("/api/step/goto", json={"index": 999}).get_json()
    assert body["current_step"] == 21
    assert body["is_final"] is True
    assert body["step"]["distances"] == {"A": 0, "B": 3, "C": 2, "D": 6}
    assert body["step"]["previous"] == {"A": None, "B": "C", "C": "A", "D": "B"}

    assert scenario_client.get("/api/step").get_json()["current_step"] == 21

    body = scenario_client.post("/api/step/goto", json={"index": -3}).get_json()
    assert body["current_step"] == 0

    assert scenario_client.post("/api/step/end").get_json()["current_step"] == 21
    assert scenario_client.post("/api/step/rewind").get_json()["current_step"] == 0


def test_compare_frame_serialises_active_edge(scenario_client):
    _trace(scenario_client, "dijkstra", source="A")
    step = scenario_client.post("/api/step/goto", json={"index": 2}).get_json()["step"]

    assert step["target_neighbor"] == "B"
    assert step["active_edges"] == [{"source": "A", "target": "B"}]


def test_export_includes_paths(scenario_client):
    _trace(scenario_client, "dijkstra", source="A")
    body = scenario_client.get("/api/trace/export").get_json()

    assert body["tracer"] == "dijkstra"
    assert len(body["steps"]) == 22
    assert body["paths"]["D"] == ["A", "C", "B", "D"]
    assert body["paths"]["A"] == ["A"]


def test_source_defaults_to_first_node(scenario_client):
    body = _trace(scenario_client, "dijkstra")
    assert body["step"]["table_highlight"] == "A"


# =========================================================================
# Warshall playback
# =========================================================================


def test_warshall_trace(scenario_client):
    body = _trace(scenario_client, "warshall")
    assert body["total_steps"] == 42
    assert body["step"]["type"] == "init"

    final = scenario_client.post("/api/step/end").get_json()["step"]
    assert final["type"] == "complete"
    assert final["matrix"] == [
        [False, True, True, True],
        [False, False, False, True],
        [False, True, False, True],
        [False, False, False, False],
    ]

    export = scenario_client.get("/api/trace/export").get_json()
    assert "paths" not in export


# =========================================================================
# Errors
# =========================================================================


def test_step_without_trace_is_rejected(client):
    resp = client.get("/api/step")

    assert resp.status_code == 400
    assert "POST /api/trace" in resp.get_json()["error"]


def test_editing_graph_drops_trace(scenario_client):
    _trace(scenario_client, "dijkstra", source="A")
    scenario_client.put("/api/graph", json=SCENARIO)

    assert scenario_client.post("/api/step/next").status_code == 400


def test_unknown_tracer(scenario_client):
    resp = scenario_client.post("/api/trace", json={"tracer": "prim"})

    assert resp.status_code == 400
    assert "prim" in resp.get_json()["error"]


def test_invalid_source(scenario_client):
    resp = scenario_client.post("/api/trace", json={"tracer": "dijkstra", "source": "Z"})

    assert resp.status_code == 400
    assert "'Z'" in resp.get_json()["error"]


def test_put_rejects_dangling_edge(client):
    resp = client.put("/api/graph", json={"nodes": [{"id": "A"}], "edges": [{"from": "A", "to": "Q"}]})

    assert resp.status_code == 400
    assert "unknown node" in resp.get_json()["error"]


def test_put_rejects_oversized_graph(client):
    nodes = [{"id": str(i)} for i in range(27)]
    resp = client.put("/api/graph", json={"nodes": nodes, "edges": []})

    assert resp.status_code == 400
    assert "limit" in resp.get_json()["error"]


def test_generate_rejects_bad_size(client):
    assert client.post("/api/graph/generate", json={"nodes": 0}).status_code == 400


@pytest.mark.parametrize("payload", [
    {"nodes": True},
    {"nodes": 4, "seed": [1, 2]},
    {"nodes": 4, "seed": {"a": 1}},
    {"nodes": 4, "seed": False},
])
def test_generate_rejects_bad_parameters(client, payload):
    resp = client.post("/api/graph/generate", json=payload)

    assert resp.status_code == 400
    assert "must be" in resp.get_json()["error"]


def test_put_rejects_non_numeric_coordinate(client):
    resp = client.put("/api/graph", json={"nodes": [{"id": "A", "x": "abc"}], "edges": []})

    assert resp.status_code == 400
    assert "Malformed graph payload" in resp.get_json()["error"]


def test_import_rejects_bad_text(client):
    assert client.post("/api/graph/import", json={"text": "A: B(x)"}).status_code == 400


def test_goto_requires_integer(scenario_client):
    _trace(scenario_client, "dijkstra", source="A")
    assert scenario_client.post("/api/step/goto", json={"index": "3"}).status_code == 400


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_empty_graph_traces_to_nothing(client):
    client.put("/api/graph", json={"nodes": [], "edges": []})
    body = _trace(client, "dijkstra")

    assert body["total_steps"] == 0
    assert body["step"] is None


# =========================================================================
# Playback config
# =========================================================================


def test_play_toggle_and_speed(client):
    assert client.post("/api/config/speed", json={"speed": "fast"}).get_json()["interval"] == 0.6
    assert client.post("/api/step/play").get_json() == {"is_playing": True, "interval": 0.6}
    assert client.post("/api/step/play").get_json()["is_playing"] is False
    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400


# =========================================================================
# Logging
# =========================================================================


def test_importing_app_leaves_logging_alone(monkeypatch):
    import main

    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    importlib.reload(main)
    assert calls == []

    main.configure_logging("debug")
    assert calls[0]["level"] == "DEBUG"
