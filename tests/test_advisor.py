import asyncio
import json

import httpx
import pytest

from config.load_config import NarrativeCfg
from ladder.models import LadderParameters, Mode
from ladder.validators import validate
from report.advisor import FALLBACK_MESSAGE, NarrativeAdvisor, build_prompt


def _ok_payload(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _advise(advisor: NarrativeAdvisor, params: LadderParameters):
    return asyncio.run(advisor.advise(params, validate(params)))


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


def test_prompt_for_design_mode():
    params = LadderParameters()
    prompt = build_prompt(params, validate(params))
    assert "ANÁLISE DE PROJETO" in prompt
    assert "NR-12 - Segurança no Trabalho" in prompt
    assert "Em conformidade com os critérios automáticos." in prompt
    assert "O projeto está apto para fabricação?" in prompt


def test_prompt_for_audit_lists_failures():
    params = LadderParameters(mode=Mode.AUDIT, width=700, total_height=5000, has_cage=False)
    prompt = build_prompt(params, validate(params))
    assert "AUDITORIA TÉCNICA (AS-BUILT)" in prompt
    assert "Anexo III - 12.12.1 (a)" in prompt
    assert "Queda livre desimpedida" in prompt
    assert "Em conformidade" not in prompt
    assert "(Interdição, Uso Restrito ou Liberada)" in prompt


def test_advise_returns_service_text(api_key):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_ok_payload("## Parecer\nLiberada."))

    advisor = NarrativeAdvisor(NarrativeCfg(model="m1"), transport=httpx.MockTransport(handler))
    result = _advise(advisor, LadderParameters())

    assert result.ok is True
    assert result.text == "## Parecer\nLiberada."
    assert result.model == "m1"
    assert seen["path"] == "/v1beta/models/m1:generateContent"
    assert seen["key"] == api_key
    assert "escada marinheiro" in seen["body"]["contents"][0]["parts"][0]["text"]


def test_http_error_falls_back(api_key):
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"}))
    result = _advise(NarrativeAdvisor(NarrativeCfg(), transport=transport), LadderParameters())
    assert result.ok is False
    assert result.text == FALLBACK_MESSAGE


def test_malformed_payload_falls_back(api_key):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
    result = _advise(NarrativeAdvisor(NarrativeCfg(), transport=transport), LadderParameters())
    assert result.ok is False
    assert result.text == FALLBACK_MESSAGE


def test_connection_error_falls_back(api_key):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    result = _advise(NarrativeAdvisor(NarrativeCfg(), transport=httpx.MockTransport(handler)), LadderParameters())
    assert result.text == FALLBACK_MESSAGE


def test_missing_key_skips_network(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    result = _advise(NarrativeAdvisor(NarrativeCfg(), transport=httpx.MockTransport(handler)), LadderParameters())
    assert result.ok is False
    assert result.text == FALLBACK_MESSAGE


def test_disabled_advisor_returns_fallback(api_key):
    result = _advise(NarrativeAdvisor(NarrativeCfg(enabled=False)), LadderParameters())
    assert result.ok is False
    assert result.text == FALLBACK_MESSAGE
