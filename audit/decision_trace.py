from __future__ import annotations

import json
import time
import uuid
from typing import Any


def add_trace_event(
    trace: list[dict[str, Any]],
    event: str,
    data: dict[str, Any] | None = None,
    *,
    level: str = "info",
) -> None:
    """
    Append one machine-readable audit event.

    Keep payloads small; the trace travels with the evaluation response.
    """
    if data is None:
        data = {}

    trace.append(
        {
            "id": str(uuid.uuid4()),
            "ts": float(time.time()),
            "event": str(event),
            "level": str(level),
            "data": data,
        }
    )


def add_rule_eval(
    trace: list[dict[str, Any]],
    *,
    decision_id: str,
    rule_id: str,
    standard: str,
    ok: bool,
    clause: str | None = None,
    metrics: dict[str, Any] | None = None,
    severity: str = "info",
) -> None:
    """Minimal "why passed / why failed" event for one compliance rule."""
    payload: dict[str, Any] = {
        "decision_id": str(decision_id),
        "rule_id": str(rule_id),
        "standard": str(standard),
        "ok": bool(ok),
    }
    if clause is not None:
        payload["clause"] = str(clause)
    if metrics is not None:
        payload["metrics"] = metrics

    add_trace_event(trace, "rule_eval", payload, level=str(severity))


def trace_to_ndjson_bytes(trace: list[dict[str, Any]]) -> bytes:
    lines = [json.dumps(ev, ensure_ascii=False, separators=(",", ":"), default=str) for ev in trace]
    return ("\n".join(lines) + ("\n" if lines else "")).encode("utf-8")
