from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ladder.calculation import calculate
from ladder.models import CalculationResult, LadderParameters, ValidationFinding
from ladder.spec import DEFAULT_SPEC
from ladder.validators import validate


@dataclass(frozen=True)
class EvaluationReport:
    """
    Findings plus calculation for one parameter set, with the comparisons
    consumers usually need: declared devices vs. what the standard requires,
    and the safety-factor flag.
    """

    params: LadderParameters
    findings: tuple[ValidationFinding, ...]
    calculation: CalculationResult
    min_safety_factor: float

    @property
    def failed_rules(self) -> list[str]:
        return [f.id for f in self.findings if not f.is_valid]

    @property
    def compliant(self) -> bool:
        return not self.failed_rules

    @property
    def cage_missing(self) -> bool:
        return self.calculation.cage_mandatory and not self.params.has_cage

    @property
    def platform_missing(self) -> bool:
        return self.calculation.platform_mandatory and not self.params.has_platform

    @property
    def safety_factor_flagged(self) -> bool:
        return self.calculation.structural_integrity.safety_factor < self.min_safety_factor

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": self.params.model_dump(mode="json"),
            "findings": [f.to_dict() for f in self.findings],
            "calculation": self.calculation.to_dict(),
            "summary": {
                "compliant": self.compliant,
                "failed_rules": self.failed_rules,
                "cage_missing": self.cage_missing,
                "platform_missing": self.platform_missing,
                "safety_factor_flagged": self.safety_factor_flagged,
                "min_safety_factor": self.min_safety_factor,
            },
        }

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def evaluate(
    params: LadderParameters,
    *,
    min_safety_factor: float = DEFAULT_SPEC.min_safety_factor,
    trace: list[dict[str, Any]] | None = None,
) -> EvaluationReport:
    return EvaluationReport(
        params=params,
        findings=tuple(validate(params, trace=trace)),
        calculation=calculate(params),
        min_safety_factor=float(min_safety_factor),
    )
