import json

from ladder.models import LadderParameters, Material, Mode, Standard
from ladder.report import evaluate


def test_default_report_is_clean():
    rep = evaluate(LadderParameters())
    assert rep.compliant is True
    assert rep.failed_rules == []
    assert rep.cage_missing is False
    assert rep.platform_missing is False
    assert rep.safety_factor_flagged is False


def test_audit_detects_missing_cage():
    params = LadderParameters(mode=Mode.AUDIT, standard=Standard.OSHA1910_27, total_height=8000, has_cage=False)
    rep = evaluate(params)
    assert rep.cage_missing is True
    assert "cage_requirement" in rep.failed_rules
    assert rep.compliant is False


def test_platform_missing_is_separate_from_findings():
    rep = evaluate(LadderParameters(total_height=6500, has_platform=False))
    assert rep.platform_missing is True
    assert "platform" not in " ".join(rep.failed_rules)


def test_safety_factor_flag_uses_threshold():
    params = LadderParameters(material=Material.ALUMINIUM, width=600, rung_diameter=20)
    assert evaluate(params).safety_factor_flagged is True
    assert evaluate(LadderParameters(), min_safety_factor=3.0).safety_factor_flagged is True


def test_report_serialises_to_json():
    rep = evaluate(LadderParameters())
    data = json.loads(rep.to_json_bytes())
    assert data["params"]["material"] == "Aço galvanizado"
    assert data["params"]["mode"] == "projeto"
    assert len(data["findings"]) == 6
    assert data["findings"][0]["severity"] == "critical"
    assert data["calculation"]["structural_integrity"]["safety_factor"] == rep.calculation.structural_integrity.safety_factor
    assert data["summary"]["compliant"] is True
