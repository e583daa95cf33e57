from __future__ import annotations

import logging
import uuid
from typing import Any, Callable

from audit.decision_trace import add_rule_eval
from ladder.models import LadderParameters, Severity, ValidationFinding
from standards.registry import StandardProfile, lookup_standard

logger = logging.getLogger(__name__)

CAGE_INSTALLED = "Instalada"
CAGE_ABSENT = "Ausente"


def fmt_mm(value: float) -> str:
    """Render a millimetre figure without a trailing ".0"."""
    v = float(value)
    return str(int(v)) if v.is_integer() else str(v)


def _range_limit(lo: float, hi: float) -> str:
    return f"{fmt_mm(lo)}-{fmt_mm(hi)}mm"


def _min_limit(lo: float) -> str:
    return f"min. {fmt_mm(lo)}mm"


def _finding(
    params: LadderParameters,
    *,
    rule_id: str,
    clause: str,
    description: str,
    ok: bool,
    value: float | str,
    limit: str,
    severity: Severity,
    risk: str,
) -> ValidationFinding:
    return ValidationFinding(
        id=rule_id,
        standard_code=params.standard.value,
        clause=clause,
        description=description,
        is_valid=bool(ok),
        value=value,
        limit=limit,
        severity=severity,
        associated_risk=risk,
    )


def check_width(params: LadderParameters, std: StandardProfile) -> ValidationFinding:
    return _finding(
        params,
        rule_id="width",
        clause=std.clauses.width,
        description="Largura útil (espaço livre)",
        ok=std.min_width <= params.width <= std.max_width,
        value=params.width,
        limit=_range_limit(std.min_width, std.max_width),
        severity=Severity.CRITICAL,
        risk="Risco de aprisionamento lateral ou instabilidade por largura excessiva.",
    )


def check_rung_spacing(params: LadderParameters, std: StandardProfile) -> ValidationFinding:
    return _finding(
        params,
        rule_id="rung_spacing",
        clause=std.clauses.spacing,
        description="Passo vertical constante",
        ok=std.min_rung_spacing <= params.rung_spacing <= std.max_rung_spacing,
        value=params.rung_spacing,
        limit=_range_limit(std.min_rung_spacing, std.max_rung_spacing),
        severity=Severity.CRITICAL,
        risk="Queda em altura por fadiga ou perda de ritmo (tropeço) na ascensão.",
    )


def check_wall_distance(params: LadderParameters, std: StandardProfile) -> ValidationFinding:
    return _finding(
        params,
        rule_id="wall_dist",
        clause=std.clauses.wall,
        description="Afastamento de obstáculos fixos",
        ok=params.wall_distance >= std.min_wall_distance,
        value=params.wall_distance,
        limit=_min_limit(std.min_wall_distance),
        severity=Severity.CRITICAL,
        risk="Apoio plantar incompleto; risco severo de escorregamento do calçado.",
    )


def check_rung_diameter(params: LadderParameters, std: StandardProfile) -> ValidationFinding:
    return _finding(
        params,
        rule_id="rung_diameter",
        clause=std.clauses.rungs,
        description="Seção transversal do degrau",
        ok=params.rung_diameter >= std.min_rung_diameter,
        value=params.rung_diameter,
        limit=_min_limit(std.min_rung_diameter),
        severity=Severity.WARNING,
        risk="Fadiga nas mãos por empunhadura deficiente e risco de flambagem/flexão excessiva.",
    )


def check_cage_requirement(params: LadderParameters, std: StandardProfile) -> ValidationFinding:
    # Reads the declared has_cage flag, not the height-derived requirement.
    return _finding(
        params,
        rule_id="cage_requirement",
        clause=std.clauses.cage,
        description="Requisito de Proteção Coletiva",
        ok=params.total_height <= std.cage_required_above or params.has_cage,
        value=CAGE_INSTALLED if params.has_cage else CAGE_ABSENT,
        limit=f"Obrigatória > {fmt_mm(std.cage_required_above)}mm",
        severity=Severity.CRITICAL,
        risk="Queda livre desimpedida com impacto direto no solo (fatalidade).",
    )


def check_cage_start(params: LadderParameters, std: StandardProfile) -> ValidationFinding:
    return _finding(
        params,
        rule_id="cage_start",
        clause=std.clauses.cage,
        description="Altura de início da proteção",
        ok=(not params.has_cage)
        or (std.cage_start_min <= params.cage_start_height <= std.cage_start_max),
        value=params.cage_start_height,
        limit=_range_limit(std.cage_start_min, std.cage_start_max),
        severity=Severity.WARNING,
        risk="Altura baixa dificulta acesso; altura elevada permite queda lateral antes da retenção.",
    )


RULES: tuple[Callable[[LadderParameters, StandardProfile], ValidationFinding], ...] = (
    check_width,
    check_rung_spacing,
    check_wall_distance,
    check_rung_diameter,
    check_cage_requirement,
    check_cage_start,
)

RULE_IDS = ("width", "rung_spacing", "wall_dist", "rung_diameter", "cage_requirement", "cage_start")


def validate(
    params: LadderParameters,
    *,
    trace: list[dict[str, Any]] | None = None,
) -> list[ValidationFinding]:
    """Evaluate every rule of the active standard, in the fixed report order."""
    std = lookup_standard(params.standard)
    findings = [rule(params, std) for rule in RULES]

    if trace is not None:
        decision_id = f"validate:{uuid.uuid4()}"
        for f in findings:
            add_rule_eval(
                trace,
                decision_id=decision_id,
                rule_id=f.id,
                standard=f.standard_code,
                ok=f.is_valid,
                clause=f.clause,
                metrics={"value": f.value, "limit": f.limit},
                severity=f.severity.value,
            )

    logger.debug(
        "validated %s: %d/%d rules passed",
        params.standard.value,
        sum(1 for f in findings if f.is_valid),
        len(findings),
    )
    return findings
