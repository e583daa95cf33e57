"""Normative limits for fixed ladders, per supported standard.

Values are transcribed from the regulatory texts and are compliance-bearing:
do not round or "tidy" them.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ladder.errors import UnknownStandardError
from ladder.models import Standard


@dataclass(frozen=True)
class ClauseMap:
    width: str
    rungs: str
    spacing: str
    wall: str
    cage: str
    platform: str


@dataclass(frozen=True)
class StandardProfile:
    key: Standard
    name: str
    version: str
    last_update: str

    min_width: float
    max_width: float
    min_rung_spacing: float
    max_rung_spacing: float
    min_rung_diameter: float
    min_wall_distance: float

    cage_required_above: float
    cage_start_min: float
    cage_start_max: float
    cage_diameter_min: float
    cage_diameter_max: float
    platform_required_above: float

    default_width: float
    default_rung_spacing: float
    default_rung_diameter: float
    default_wall_distance: float

    clauses: ClauseMap


_PROFILES = (
    StandardProfile(
        key=Standard.NR12,
        name="NR-12 - Segurança no Trabalho em Máquinas e Equipamentos",
        version="2019 (Atualizada Portaria SEPRT 916)",
        last_update="2019-07-30",
        min_width=400,
        max_width=600,
        min_rung_spacing=250,
        max_rung_spacing=300,
        min_rung_diameter=25,
        min_wall_distance=150,
        cage_required_above=3500,
        cage_start_min=2200,
        cage_start_max=3000,
        cage_diameter_min=650,
        cage_diameter_max=800,
        platform_required_above=6000,
        default_width=450,
        default_rung_spacing=300,
        default_rung_diameter=25,
        default_wall_distance=200,
        clauses=ClauseMap(
            width="Anexo III - 12.12.1 (a)",
            rungs="Anexo III - 12.12.1 (b)",
            spacing="Anexo III - 12.12.1 (c)",
            wall="Anexo III - 12.12.1 (d)",
            cage="Anexo III - 12.12.1 (e)",
            platform="Anexo III - 12.12.1 (h)",
        ),
    ),
    StandardProfile(
        key=Standard.NBR14718,
        name="ABNT NBR 15708-4 / NBR 14718 equivalent",
        version="2015",
        last_update="2015-12-01",
        min_width=400,
        max_width=500,
        min_rung_spacing=250,
        max_rung_spacing=300,
        min_rung_diameter=25,
        min_wall_distance=150,
        cage_required_above=2000,
        cage_start_min=2100,
        cage_start_max=2400,
        cage_diameter_min=650,
        cage_diameter_max=750,
        platform_required_above=4000,
        default_width=400,
        default_rung_spacing=300,
        default_rung_diameter=25,
        default_wall_distance=150,
        clauses=ClauseMap(
            width="Cláusula 4.2",
            rungs="Cláusula 4.3",
            spacing="Cláusula 4.4",
            wall="Cláusula 4.5",
            cage="Cláusula 5.1",
            platform="Cláusula 5.3",
        ),
    ),
    StandardProfile(
        key=Standard.ISO14122_4,
        name="ISO 14122-4 - Safety of machinery - Fixed ladders",
        version="2016",
        last_update="2016-06-01",
        min_width=400,
        max_width=600,
        min_rung_spacing=225,
        max_rung_spacing=300,
        min_rung_diameter=20,
        min_wall_distance=150,
        cage_required_above=3000,
        cage_start_min=2200,
        cage_start_max=3000,
        cage_diameter_min=650,
        cage_diameter_max=800,
        platform_required_above=6000,
        default_width=500,
        default_rung_spacing=250,
        default_rung_diameter=30,
        default_wall_distance=200,
        clauses=ClauseMap(
            width="ISO 14122-4:4.4.1.2",
            rungs="ISO 14122-4:4.4.1.1",
            spacing="ISO 14122-4:4.4.1.1",
            wall="ISO 14122-4:4.4.1.3",
            cage="ISO 14122-4:4.5",
            platform="ISO 14122-4:4.6",
        ),
    ),
    StandardProfile(
        key=Standard.OSHA1910_27,
        name="OSHA 1910.27 - Fixed Ladders",
        version="1910 Subpart D",
        last_update="2017-01-17",
        min_width=406,
        max_width=610,
        min_rung_spacing=254,
        max_rung_spacing=305,
        min_rung_diameter=19,
        min_wall_distance=178,
        cage_required_above=7315,
        cage_start_min=2133,
        cage_start_max=2438,
        cage_diameter_min=685,
        cage_diameter_max=762,
        platform_required_above=9144,
        default_width=457,
        default_rung_spacing=305,
        default_rung_diameter=25,
        default_wall_distance=178,
        clauses=ClauseMap(
            width="1910.27(b)(1)",
            rungs="1910.27(b)(1)",
            spacing="1910.27(b)(1)",
            wall="1910.27(c)(4)",
            cage="1910.27(d)(1)",
            platform="1910.27(d)(2)",
        ),
    ),
)

STANDARDS: Mapping[Standard, StandardProfile] = MappingProxyType({p.key: p for p in _PROFILES})


def lookup_standard(key: Standard | str) -> StandardProfile:
    try:
        return STANDARDS[Standard(key)]
    except (ValueError, KeyError):
        raise UnknownStandardError(key) from None
