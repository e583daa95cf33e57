from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ladder.errors import UnknownMaterialError
from ladder.models import Material


@dataclass(frozen=True)
class MaterialProfile:
    key: Material
    density: float  # kg/m3
    yield_strength: float  # MPa
    youngs_modulus: float  # MPa
    thermal_expansion: float  # 1/K


_PROFILES = (
    # ASTM A36 equivalent
    MaterialProfile(Material.CARBON_STEEL, 7850, 250, 210000, 12e-6),
    MaterialProfile(Material.GALVANIZED_STEEL, 7850, 250, 210000, 12e-6),
    # AISI 304
    MaterialProfile(Material.STAINLESS_STEEL, 8000, 210, 193000, 17.3e-6),
    # 6061-T6, approx.
    MaterialProfile(Material.ALUMINIUM, 2700, 145, 70000, 23e-6),
    # pultruded profile
    MaterialProfile(Material.FRP, 1800, 150, 25000, 8e-6),
)

MATERIALS: Mapping[Material, MaterialProfile] = MappingProxyType({p.key: p for p in _PROFILES})


def lookup_material(key: Material | str) -> MaterialProfile:
    try:
        return MATERIALS[Material(key)]
    except (ValueError, KeyError):
        raise UnknownMaterialError(key) from None
