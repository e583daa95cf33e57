from __future__ import annotations

import math
from typing import Any

from ladder.calculation import rung_layout
from ladder.models import LadderParameters, Material
from ladder.spec import DEFAULT_CATALOG, DEFAULT_SPEC, Catalog, LadderSpec


def _line(catalog: Catalog, part_id: str, specification: str, qty: int, length_m: float | None = None) -> dict[str, Any]:
    part = catalog.get(part_id)
    return {
        "part_id": part_id,
        "name": part.name if part is not None else part_id,
        "specification": specification,
        "qty": int(qty),
        "unit": part.unit if part is not None else "un",
        "total_length_m": float(length_m) if length_m is not None else None,
    }


def bom_from_params(
    params: LadderParameters,
    catalog: Catalog = DEFAULT_CATALOG,
    spec: LadderSpec = DEFAULT_SPEC,
) -> dict[str, Any]:
    mat = params.material.value
    suffix = " (Perfil Pultrudado)" if params.material is Material.FRP else " (Perfil Metálico)"

    n_intervals, _ = rung_layout(params.total_height, params.rung_spacing)
    n_rungs = n_intervals + 1
    stringer_height = params.total_height + params.top_extension

    lines: list[dict[str, Any]] = [
        _line(catalog, "stringer", f"Barra chata ou perfil U em {mat}{suffix}", 2, stringer_height * 2 / 1000),
        _line(
            catalog,
            "rung",
            f"Barra redonda Ø{params.rung_diameter:g}mm em {mat}",
            n_rungs,
            n_rungs * params.width / 1000,
        ),
    ]

    if params.has_cage:
        cage_height = max(0.0, params.total_height - params.cage_start_height)
        n_hoops = math.ceil(cage_height / spec.hoop_pitch_mm) + 1
        lines.append(
            _line(
                catalog,
                "cage_hoop",
                f"Barra chata em {mat}",
                n_hoops,
                n_hoops * math.pi * params.cage_diameter / 1000,
            )
        )
        lines.append(
            _line(
                catalog,
                "cage_vertical",
                f"Barra chata ou redonda em {mat}",
                spec.cage_vertical_bars,
                spec.cage_vertical_bars * cage_height / 1000,
            )
        )

    n_brackets = max(0, math.ceil(params.total_height / spec.bracket_pitch_mm)) * 2
    lines.append(
        _line(
            catalog,
            "bracket",
            f"Cantoneira ou suporte custom {params.installation_type.value}",
            n_brackets,
        )
    )
    lines.append(
        _line(catalog, "anchor_bolt", "Parabolt ou Parafuso Sextavado Gr.5", n_brackets * spec.bolts_per_bracket)
    )

    return {
        "lines": lines,
        "totals": {
            "unique_parts": len(lines),
            "total_pieces": sum(line["qty"] for line in lines),
            "total_length_m": float(sum(line["total_length_m"] or 0.0 for line in lines)),
        },
    }
