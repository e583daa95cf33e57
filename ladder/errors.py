from __future__ import annotations


class LadderEngineError(Exception):
    """Base class for structurally invalid engine calls."""


class UnknownStandardError(LadderEngineError, LookupError):
    def __init__(self, key: object) -> None:
        super().__init__(f"Unknown standard: {key!r}")
        self.key = key


class UnknownMaterialError(LadderEngineError, LookupError):
    def __init__(self, key: object) -> None:
        super().__init__(f"Unknown material: {key!r}")
        self.key = key


class DegenerateGeometryError(LadderEngineError, ValueError):
    """Raised when the rung bending check would divide by zero."""

    def __init__(self, field_name: str, value: float) -> None:
        super().__init__(f"{field_name}={value!r} leaves the rung bending stress undefined")
        self.field_name = field_name
        self.value = value
