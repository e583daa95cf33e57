"""Design/Audit mode reconciliation.

In Design mode the geometric fields a standard prescribes follow that
standard's defaults, and the cage/platform flags follow its height
thresholds. In Audit mode every field is an as-measured fact and is never
overwritten.
"""
from __future__ import annotations

from ladder.models import LadderParameters, Mode, Standard
from standards.registry import lookup_standard


def apply_design_defaults(params: LadderParameters) -> LadderParameters:
    if params.mode is not Mode.DESIGN:
        return params

    std = lookup_standard(params.standard)
    return params.model_copy(
        update={
            "width": std.default_width,
            "rung_spacing": std.default_rung_spacing,
            "rung_diameter": std.default_rung_diameter,
            "wall_distance": std.default_wall_distance,
            "has_cage": params.total_height > std.cage_required_above,
            "has_platform": params.total_height > std.platform_required_above,
        }
    )


def switch_standard(params: LadderParameters, standard: Standard | str) -> LadderParameters:
    updated = params.model_copy(update={"standard": lookup_standard(standard).key})
    return apply_design_defaults(updated)


def switch_mode(params: LadderParameters, mode: Mode | str) -> LadderParameters:
    updated = params.model_copy(update={"mode": Mode(mode)})
    return apply_design_defaults(updated)
