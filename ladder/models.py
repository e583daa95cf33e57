from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Mode(str, Enum):
    DESIGN = "projeto"
    AUDIT = "auditoria"


class Standard(str, Enum):
    NR12 = "NR12"
    NBR14718 = "NBR14718"
    ISO14122_4 = "ISO14122_4"
    OSHA1910_27 = "OSHA1910_27"


class Material(str, Enum):
    CARBON_STEEL = "Aço carbono"
    GALVANIZED_STEEL = "Aço galvanizado"
    STAINLESS_STEEL = "Aço inox"
    ALUMINIUM = "Alumínio"
    FRP = "FRP"


class InstallationType(str, Enum):
    WALL = "Parede"
    STEEL_STRUCTURE = "Estrutura metálica"
    TOWER = "Torre"


class Environment(str, Enum):
    INDOOR = "Interno"
    OUTDOOR = "Externo"
    CORROSIVE = "Corrosivo"


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class LadderParameters(BaseModel):
    """
    One ladder configuration, all lengths in millimetres.

    Values are not range-checked here: the validation engine reports on
    whatever it is given.
    """

    model_config = ConfigDict(frozen=True)

    mode: Mode = Mode.DESIGN
    standard: Standard = Standard.NR12
    installation_type: InstallationType = InstallationType.WALL
    environment: Environment = Environment.INDOOR

    total_height: float = 6000.0
    width: float = 450.0
    rung_spacing: float = 300.0
    rung_diameter: float = 25.0
    wall_distance: float = 200.0
    cage_start_height: float = 2500.0
    cage_diameter: float = 700.0
    top_extension: float = 1100.0
    handrail_height: float = 1100.0

    has_cage: bool = True
    has_platform: bool = False
    material: Material = Material.GALVANIZED_STEEL


@dataclass(frozen=True)
class ValidationFinding:
    id: str
    standard_code: str
    clause: str
    description: str
    is_valid: bool
    value: float | str
    limit: str
    severity: Severity
    associated_risk: str

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["severity"] = self.severity.value
        return d


@dataclass(frozen=True)
class StructuralIntegrity:
    max_stress_rung: float  # MPa
    yield_strength: float  # MPa
    safety_factor: float


@dataclass(frozen=True)
class CalculationResult:
    total_rungs: int
    actual_rung_spacing: float
    max_height_without_cage: float
    cage_mandatory: bool
    platform_mandatory: bool
    weight_estimated: float  # kg
    reaction_force_base: float  # kN
    structural_integrity: StructuralIntegrity

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
