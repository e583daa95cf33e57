import json

from audit.decision_trace import add_rule_eval, add_trace_event, trace_to_ndjson_bytes


def test_trace_ndjson_is_valid_json_per_line():
    t = []
    add_trace_event(t, "a", {"x": 1})
    add_rule_eval(t, decision_id="d1", rule_id="width", standard="NR12", ok=False, clause="c", severity="critical")
    data = trace_to_ndjson_bytes(t).decode("utf-8").strip().splitlines()
    assert len(data) == 2
    a = json.loads(data[0])
    b = json.loads(data[1])
    assert a["event"] == "a"
    assert b["event"] == "rule_eval"
    assert b["level"] == "critical"
    assert b["data"] == {"decision_id": "d1", "rule_id": "width", "standard": "NR12", "ok": False, "clause": "c"}
    assert "id" in a and "ts" in a


def test_empty_trace_is_empty_bytes():
    assert trace_to_ndjson_bytes([]) == b""
