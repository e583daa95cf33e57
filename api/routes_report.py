from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from ladder.models import LadderParameters
from ladder.validators import validate
from observability import metrics as metrics_mod

router = APIRouter(prefix="/ladder", tags=["report"])


@router.post("/report")
async def narrative_report(request: Request, params: LadderParameters):
    """Narrative review of the current design; falls back to a fixed text on any service error."""
    state = request.app.state.runtime
    try:
        state.rate_limiter.check(request)
    except HTTPException:
        if metrics_mod.RATE_LIMITED_TOTAL is not None:
            metrics_mod.RATE_LIMITED_TOTAL.labels(request.url.path).inc()
        raise

    findings = validate(params)
    result = await state.advisor.advise(params, findings)
    return {
        "ok": result.ok,
        "text": result.text,
        "model": result.model,
        "failed_rules": [f.id for f in findings if not f.is_valid],
    }
