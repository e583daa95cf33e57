from __future__ import annotations

from ladder.calculation import rung_layout
from ladder.models import LadderParameters
from ladder.validators import fmt_mm

FRONT_LAYER = "LADDER_FRONT"
SIDE_LAYER = "LADDER_SIDE"
SIDE_VIEW_GAP_MM = 500.0


class DxfWriter:
    """Minimal ASCII DXF: a single ENTITIES section of LINE entities."""

    def __init__(self) -> None:
        self._chunks: list[str] = ["0\nSECTION\n2\nENTITIES\n"]

    def line(self, x1: float, y1: float, x2: float, y2: float, layer: str = "0") -> None:
        self._chunks.append(
            f"0\nLINE\n8\n{layer}\n"
            f"10\n{fmt_mm(x1)}\n20\n{fmt_mm(y1)}\n"
            f"11\n{fmt_mm(x2)}\n21\n{fmt_mm(y2)}\n"
        )

    def text(self) -> str:
        return "".join(self._chunks) + "0\nENDSEC\n0\nEOF\n"


def generate_dxf(params: LadderParameters) -> str:
    dxf = DxfWriter()
    h = params.total_height
    w = params.width
    top = h + params.top_extension

    # Front view
    dxf.line(0, 0, 0, top, FRONT_LAYER)
    dxf.line(w, 0, w, top, FRONT_LAYER)

    n_intervals, _ = rung_layout(h, params.rung_spacing)
    for i in range(n_intervals + 1):
        y = i * params.rung_spacing
        dxf.line(0, y, w, y, FRONT_LAYER)

    dxf.line(0, top, w, top, FRONT_LAYER)

    # Side view, offset to the right of the front view
    if params.has_cage:
        x0 = w + SIDE_VIEW_GAP_MM + params.wall_distance
        outer = x0 + params.cage_diameter
        dxf.line(x0, 0, x0, top, SIDE_LAYER)
        dxf.line(outer, params.cage_start_height, outer, h, SIDE_LAYER)
        dxf.line(x0, h, outer, h, SIDE_LAYER)

    return dxf.text()
