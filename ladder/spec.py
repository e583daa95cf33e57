from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Part:
    part_id: str
    name: str
    unit: str = "un"
    meta: dict[str, Any] | None = None


class Catalog:
    def __init__(self) -> None:
        self.parts: dict[str, Part] = {}
        self._init_defaults()

    def _init_defaults(self) -> None:
        self.add(Part("stringer", "Montante Lateral", meta={"role": "structure"}))
        self.add(Part("rung", "Degrau", meta={"role": "structure"}))
        self.add(Part("cage_hoop", "Aro da Gaiola", meta={"role": "fall_protection"}))
        self.add(Part("cage_vertical", "Barra Vertical Gaiola", meta={"role": "fall_protection"}))
        self.add(Part("bracket", "Suporte de Fixação", meta={"role": "fixing"}))
        self.add(Part("anchor_bolt", "Chumbadores / Parafusos", meta={"role": "fixing"}))

    def add(self, part: Part) -> None:
        self.parts[part.part_id] = part

    def get(self, part_id: str) -> Part | None:
        return self.parts.get(part_id)


DEFAULT_CATALOG = Catalog()


@dataclass(frozen=True)
class LadderSpec:
    # Stringer modelled as a 65x10 mm flat bar.
    stringer_width_mm: float = 65.0
    stringer_thickness_mm: float = 10.0
    # Concentrated normative load at rung mid-span (1.5 kN).
    rung_point_load_n: float = 1500.0
    # Empirical volume per mm of caged height (verticals + hoops).
    cage_volume_per_mm: float = 0.008
    # Legacy divisor applied to every mm-based volume. A strict mm3->m3
    # conversion is 1e9; the published mass figures use 1e6.
    legacy_volume_divisor: float = 1_000_000.0
    # kg -> kN
    gravity_kn_per_kg: float = 0.00981
    min_safety_factor: float = 1.5

    # Bill of materials
    hoop_pitch_mm: float = 1000.0
    cage_vertical_bars: int = 5
    bracket_pitch_mm: float = 1500.0
    bolts_per_bracket: int = 2

    @property
    def stringer_area_mm2(self) -> float:
        return self.stringer_width_mm * self.stringer_thickness_mm


DEFAULT_SPEC = LadderSpec()
