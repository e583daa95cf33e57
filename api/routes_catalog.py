from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from ladder.errors import UnknownMaterialError, UnknownStandardError
from standards.materials import MATERIALS, lookup_material
from standards.registry import STANDARDS, lookup_standard

router = APIRouter(tags=["catalog"])


@router.get("/standards")
def list_standards():
    return {
        "standards": [
            {"key": p.key.value, "name": p.name, "version": p.version, "last_update": p.last_update}
            for p in STANDARDS.values()
        ]
    }


@router.get("/standards/{key}")
def get_standard(key: str):
    try:
        profile = lookup_standard(key)
    except UnknownStandardError:
        raise HTTPException(status_code=404, detail={"status": "UNKNOWN_STANDARD", "key": key})
    return asdict(profile)


@router.get("/materials")
def list_materials():
    return {"materials": [asdict(m) for m in MATERIALS.values()]}


@router.get("/materials/{key}")
def get_material(key: str):
    try:
        profile = lookup_material(key)
    except UnknownMaterialError:
        raise HTTPException(status_code=404, detail={"status": "UNKNOWN_MATERIAL", "key": key})
    return asdict(profile)
