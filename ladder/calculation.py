from __future__ import annotations

import logging
import math

from ladder.errors import DegenerateGeometryError
from ladder.models import CalculationResult, LadderParameters, StructuralIntegrity
from ladder.spec import DEFAULT_SPEC, LadderSpec
from standards.materials import lookup_material
from standards.registry import lookup_standard

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int) -> float:
    """Round with ties toward +inf, matching the published tables."""
    scale = 10.0**places
    return math.floor(value * scale + 0.5) / scale


def rung_layout(total_height: float, rung_spacing: float) -> tuple[int, float]:
    """Return (intervals, evened spacing). A non-positive spacing yields (0, 0.0)."""
    if rung_spacing <= 0:
        return 0, 0.0
    n = max(0, math.floor(total_height / rung_spacing))
    if n == 0:
        return 0, 0.0
    return n, total_height / n


def estimate_mass(params: LadderParameters, n_intervals: int, density: float, spec: LadderSpec = DEFAULT_SPEC) -> float:
    stringer_length = (params.total_height + params.top_extension) * 2
    volume_rails = stringer_length * spec.stringer_area_mm2 / spec.legacy_volume_divisor

    rung_area = math.pi * (params.rung_diameter / 2) ** 2
    volume_rungs = params.width * (n_intervals + 1) * rung_area / spec.legacy_volume_divisor

    cage_height = params.total_height - params.cage_start_height if params.has_cage else 0.0
    volume_cage = cage_height * spec.cage_volume_per_mm if cage_height > 0 else 0.0

    return round_half_up((volume_rails + volume_rungs + volume_cage) * density, 2)


def rung_bending_check(
    width: float,
    rung_diameter: float,
    yield_strength: float,
    spec: LadderSpec = DEFAULT_SPEC,
) -> StructuralIntegrity:
    """
    Simply supported solid round rung, point load at mid-span.

    N and mm combine directly into MPa.
    """
    if rung_diameter == 0:
        raise DegenerateGeometryError("rung_diameter", rung_diameter)
    if width == 0:
        raise DegenerateGeometryError("width", width)

    moment = spec.rung_point_load_n * width / 4
    inertia = math.pi * rung_diameter**4 / 64
    stress = moment * (rung_diameter / 2) / inertia

    return StructuralIntegrity(
        max_stress_rung=round_half_up(stress, 2),
        yield_strength=yield_strength,
        safety_factor=round_half_up(yield_strength / stress, 2),
    )


def calculate(params: LadderParameters, spec: LadderSpec = DEFAULT_SPEC) -> CalculationResult:
    std = lookup_standard(params.standard)
    mat = lookup_material(params.material)

    n_intervals, spacing = rung_layout(params.total_height, params.rung_spacing)
    weight = estimate_mass(params, n_intervals, mat.density, spec)
    integrity = rung_bending_check(params.width, params.rung_diameter, mat.yield_strength, spec)

    result = CalculationResult(
        total_rungs=n_intervals + 1,
        actual_rung_spacing=round_half_up(spacing, 1),
        max_height_without_cage=std.cage_required_above,
        cage_mandatory=params.total_height > std.cage_required_above,
        platform_mandatory=params.total_height > std.platform_required_above,
        weight_estimated=weight,
        reaction_force_base=round_half_up(weight * spec.gravity_kn_per_kg, 2),
        structural_integrity=integrity,
    )
    logger.debug(
        "calculated %s/%s: rungs=%d weight=%.2fkg sf=%.2f",
        params.standard.value,
        params.material.value,
        result.total_rungs,
        result.weight_estimated,
        integrity.safety_factor,
    )
    return result
