import math

import pytest

from ladder.bom import bom_from_params
from ladder.models import LadderParameters, Material


def _lines(bom):
    return {line["part_id"]: line for line in bom["lines"]}


def test_default_bom_quantities():
    bom = bom_from_params(LadderParameters())
    lines = _lines(bom)
    assert [line["part_id"] for line in bom["lines"]] == [
        "stringer",
        "rung",
        "cage_hoop",
        "cage_vertical",
        "bracket",
        "anchor_bolt",
    ]
    assert lines["stringer"]["qty"] == 2
    assert lines["stringer"]["total_length_m"] == pytest.approx(14.2)
    assert lines["rung"]["qty"] == 21
    assert lines["rung"]["total_length_m"] == pytest.approx(9.45)
    assert lines["cage_hoop"]["qty"] == 5
    assert lines["cage_hoop"]["total_length_m"] == pytest.approx(5 * math.pi * 0.7)
    assert lines["cage_vertical"]["qty"] == 5
    assert lines["cage_vertical"]["total_length_m"] == pytest.approx(17.5)
    assert lines["bracket"]["qty"] == 8
    assert lines["bracket"]["total_length_m"] is None
    assert lines["anchor_bolt"]["qty"] == 16
    assert bom["totals"]["unique_parts"] == 6
    assert bom["totals"]["total_pieces"] == 2 + 21 + 5 + 5 + 8 + 16


def test_specifications_mention_material():
    lines = _lines(bom_from_params(LadderParameters(material=Material.FRP)))
    assert lines["stringer"]["specification"].endswith("FRP (Perfil Pultrudado)")
    assert lines["rung"]["specification"] == "Barra redonda Ø25mm em FRP"
    assert lines["bracket"]["specification"].endswith("Parede")

    steel = _lines(bom_from_params(LadderParameters(material=Material.STAINLESS_STEEL)))
    assert steel["stringer"]["specification"].endswith("(Perfil Metálico)")
    assert steel["rung"]["name"] == "Degrau"


def test_no_cage_lines_without_cage():
    lines = _lines(bom_from_params(LadderParameters(has_cage=False)))
    assert "cage_hoop" not in lines
    assert "cage_vertical" not in lines


def test_zero_spacing_bom_has_base_rung():
    lines = _lines(bom_from_params(LadderParameters(rung_spacing=0)))
    assert lines["rung"]["qty"] == 1
