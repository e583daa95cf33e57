import json

import pytest
from fastapi.testclient import TestClient

from config.load_config import AppConfig, NarrativeCfg, ObservabilityCfg, RateLimitCfg
from main import create_app
from report.advisor import FALLBACK_MESSAGE


def _client(**overrides) -> TestClient:
    cfg = AppConfig(
        observability=ObservabilityCfg(json_logs=False),
        narrative=NarrativeCfg(enabled=False),
        **overrides,
    )
    return TestClient(create_app(cfg))


@pytest.fixture
def client() -> TestClient:
    return _client()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_list_and_get_standards(client):
    keys = [s["key"] for s in client.get("/standards").json()["standards"]]
    assert keys == ["NR12", "NBR14718", "ISO14122_4", "OSHA1910_27"]

    r = client.get("/standards/OSHA1910_27")
    assert r.status_code == 200
    body = r.json()
    assert body["min_width"] == 406
    assert body["clauses"]["wall"] == "1910.27(c)(4)"


def test_unknown_standard_is_404(client):
    r = client.get("/standards/ABNT")
    assert r.status_code == 404
    assert r.json()["detail"]["status"] == "UNKNOWN_STANDARD"


def test_materials(client):
    assert len(client.get("/materials").json()["materials"]) == 5
    assert client.get("/materials/FRP").json()["density"] == 1800
    assert client.get("/materials/Titanio").status_code == 404


def test_validate_endpoint(client):
    r = client.post("/ladder/validate", json={"width": 700})
    assert r.status_code == 200
    findings = r.json()["findings"]
    assert [f["id"] for f in findings][:2] == ["width", "rung_spacing"]
    assert findings[0]["is_valid"] is False
    assert findings[0]["value"] == 700


def test_invalid_enum_is_rejected(client):
    assert client.post("/ladder/validate", json={"standard": "XYZ"}).status_code == 422


def test_calculate_endpoint(client):
    r = client.post("/ladder/calculate", json={"rung_spacing": 0})
    assert r.status_code == 200
    body = r.json()
    assert body["total_rungs"] == 1
    assert body["actual_rung_spacing"] == 0
    assert body["structural_integrity"]["safety_factor"] == pytest.approx(2.27, abs=0.005)


def test_calculate_degenerate_diameter_is_422(client):
    r = client.post("/ladder/calculate", json={"rung_diameter": 0})
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["status"] == "DEGENERATE_GEOMETRY"
    assert detail["field"] == "rung_diameter"


def test_evaluate_with_trace(client):
    r = client.post("/ladder/evaluate?include_trace=true", json={"mode": "auditoria", "has_cage": False})
    assert r.status_code == 200
    body = r.json()
    assert body["summary"]["cage_missing"] is True
    assert "cage_requirement" in body["summary"]["failed_rules"]
    events = [ev["event"] for ev in body["trace"]]
    assert events[0] == "evaluate_start"
    assert events[-1] == "evaluate_done"
    assert events.count("rule_eval") == 6


def test_evaluate_without_trace(client):
    body = client.post("/ladder/evaluate", json={}).json()
    assert "trace" not in body
    assert body["summary"]["compliant"] is True


def test_evaluate_trace_ndjson(client):
    r = client.post("/ladder/evaluate/trace", json={})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/x-ndjson")
    lines = [json.loads(x) for x in r.text.splitlines()]
    assert len(lines) == 8


def test_reconcile_standard_switch(client):
    payload = {"params": {"mode": "projeto", "standard": "NR12", "width": 520}, "standard": "OSHA1910_27"}
    params = client.post("/ladder/reconcile", json=payload).json()["params"]
    assert params["standard"] == "OSHA1910_27"
    assert [params[k] for k in ("width", "rung_spacing", "rung_diameter", "wall_distance")] == [457, 305, 25, 178]

    payload["params"]["mode"] = "auditoria"
    params = client.post("/ladder/reconcile", json=payload).json()["params"]
    assert params["width"] == 520


def test_bom_endpoint(client):
    body = client.post("/ladder/bom", json={"has_cage": False}).json()
    assert body["totals"]["unique_parts"] == 4


def test_dxf_export(client):
    r = client.post("/ladder/export/dxf", json={})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/dxf")
    assert "attachment" in r.headers["content-disposition"]
    assert r.text.endswith("0\nEOF\n")


def test_report_falls_back_when_disabled(client):
    r = client.post("/ladder/report", json={"width": 900})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is False
    assert body["text"] == FALLBACK_MESSAGE
    assert body["failed_rules"] == ["width"]


def test_report_rate_limited():
    client = _client(rate_limit=RateLimitCfg(enabled=True, window_seconds=60, max_requests=1))
    assert client.post("/ladder/report", json={}).status_code == 200
    r = client.post("/ladder/report", json={})
    assert r.status_code == 429
    assert "Retry-After" in r.headers


def test_metrics_exposed(client):
    client.post("/ladder/evaluate", json={"width": 10})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "ladder_evaluations_total" in r.text
