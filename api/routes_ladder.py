from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from audit.decision_trace import add_trace_event, trace_to_ndjson_bytes
from export.dxf import generate_dxf
from ladder.bom import bom_from_params
from ladder.calculation import calculate
from ladder.errors import DegenerateGeometryError
from ladder.models import LadderParameters, Mode, Standard
from ladder.reconcile import apply_design_defaults, switch_mode, switch_standard
from ladder.report import EvaluationReport, evaluate
from ladder.validators import validate
from observability.metrics import record_evaluation

router = APIRouter(prefix="/ladder", tags=["ladder"])


class ReconcileRequest(BaseModel):
    params: LadderParameters
    standard: Standard | None = None
    mode: Mode | None = None


def _degenerate(exc: DegenerateGeometryError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"status": "DEGENERATE_GEOMETRY", "field": exc.field_name, "value": exc.value, "msg": str(exc)},
    )


def _evaluate(request: Request, params: LadderParameters, trace: list[dict[str, Any]] | None) -> EvaluationReport:
    min_sf = request.app.state.runtime.config.engine.min_safety_factor
    if trace is not None:
        add_trace_event(trace, "evaluate_start", {"standard": params.standard.value, "mode": params.mode.value})
    try:
        report = evaluate(params, min_safety_factor=min_sf, trace=trace)
    except DegenerateGeometryError as exc:
        raise _degenerate(exc)
    if trace is not None:
        add_trace_event(
            trace,
            "evaluate_done",
            {"compliant": report.compliant, "safety_factor_flagged": report.safety_factor_flagged},
        )
    record_evaluation(params.standard.value, params.mode.value, report.failed_rules)
    return report


@router.post("/validate")
def validate_ladder(params: LadderParameters):
    return {"findings": [f.to_dict() for f in validate(params)]}


@router.post("/calculate")
def calculate_ladder(params: LadderParameters):
    try:
        return calculate(params).to_dict()
    except DegenerateGeometryError as exc:
        raise _degenerate(exc)


@router.post("/evaluate")
def evaluate_ladder(request: Request, params: LadderParameters, include_trace: bool = False):
    trace: list[dict[str, Any]] | None = [] if include_trace else None
    out = _evaluate(request, params, trace).to_dict()
    if trace is not None:
        out["trace"] = trace
    return out


@router.post("/evaluate/trace")
def evaluate_trace(request: Request, params: LadderParameters):
    trace: list[dict[str, Any]] = []
    _evaluate(request, params, trace)
    return Response(content=trace_to_ndjson_bytes(trace), media_type="application/x-ndjson")


@router.post("/reconcile")
def reconcile_ladder(payload: ReconcileRequest):
    params = payload.params
    if payload.standard is not None:
        params = switch_standard(params, payload.standard)
    if payload.mode is not None:
        params = switch_mode(params, payload.mode)
    if payload.standard is None and payload.mode is None:
        params = apply_design_defaults(params)
    return {"params": params.model_dump(mode="json")}


@router.post("/bom")
def ladder_bom(params: LadderParameters):
    return bom_from_params(params)


@router.post("/export/dxf")
def export_dxf(params: LadderParameters):
    filename = f"escada_{params.standard.value}_{int(params.total_height)}mm.dxf"
    return Response(
        content=generate_dxf(params),
        media_type="application/dxf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
