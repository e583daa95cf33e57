"""Narrative technical report from an external text-generation service.

The engine results are computed before and independently of this call; a
failure here only replaces the narrative with a fixed fallback text.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable

import httpx

from config.load_config import NarrativeCfg
from ladder.models import LadderParameters, Mode, ValidationFinding
from standards.registry import lookup_standard

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Erro no processamento da auditoria assistida. Verifique os dados de entrada."


@dataclass(frozen=True)
class NarrativeResult:
    text: str
    ok: bool
    model: str | None = None


def build_prompt(params: LadderParameters, findings: Iterable[ValidationFinding]) -> str:
    failed = [f for f in findings if not f.is_valid]
    standard_name = lookup_standard(params.standard).name
    audit = params.mode is Mode.AUDIT

    if failed:
        nonconformities = json.dumps(
            [
                {"clause": f.clause, "erro": f.description, "valor_real": f.value, "risco": f.associated_risk}
                for f in failed
            ],
            ensure_ascii=False,
        )
    else:
        nonconformities = "Em conformidade com os critérios automáticos."

    analysis = "AUDITORIA TÉCNICA (AS-BUILT)" if audit else "ANÁLISE DE PROJETO"
    context = (
        "A escada já está instalada e os dados representam a condição real de campo."
        if audit
        else "A escada está em fase de dimensionamento."
    )
    focus = (
        "Foque no RISCO OPERACIONAL e na RESPONSABILIDADE CIVIL/TRABALHISTA das não-conformidades encontradas."
        if audit
        else "Foque na otimização e validação normativa do projeto."
    )
    remedy = (
        "Sugira MEDIDAS CORRETIVAS para adequação da estrutura existente "
        "(ex: instalação de dispositivos antiqueda, sinalização, ou reconstrução)."
        if audit
        else "Sugira ajustes nas dimensões para garantir a segurança e economia."
    )
    conclusion = (
        "A escada pode continuar em uso? (Interdição, Uso Restrito ou Liberada)"
        if audit
        else "O projeto está apto para fabricação?"
    )
    geometry = json.dumps(params.model_dump(mode="json"), ensure_ascii=False)

    return "\n".join(
        [
            "Como engenheiro mecânico sênior e especialista em normas de acesso industrial, "
            f"realize uma {analysis} desta escada marinheiro.",
            "",
            f"CONTEXTO: {context}",
            "",
            "PARAMETROS:",
            f"- Norma de Referência: {standard_name}",
            f"- Geometria: {geometry}",
            f"- Ambiente: {params.environment.value}",
            "",
            "ITENS DE NÃO-CONFORMIDADE:",
            nonconformities,
            "",
            "DIRETRIZES DO PARECER:",
            f"1. {focus}",
            f"2. Liste as cláusulas da {standard_name} que foram violadas.",
            f"3. {remedy}",
            "4. Avalie o estado de conservação provável considerando o material "
            f"({params.material.value}) no ambiente ({params.environment.value}).",
            f"5. Conclusão Técnica: {conclusion}",
            "",
            "RESPONDA EM PORTUGUÊS (BR), em formato Markdown técnico e objetivo.",
        ]
    )


def _extract_text(payload: dict[str, Any]) -> str:
    parts = payload["candidates"][0]["content"]["parts"]
    text = "".join(str(p.get("text", "")) for p in parts)
    if not text.strip():
        raise ValueError("empty narrative in response")
    return text


class NarrativeAdvisor:
    def __init__(self, cfg: NarrativeCfg, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.cfg = cfg
        self._transport = transport

    @property
    def api_key(self) -> str | None:
        return os.getenv(self.cfg.api_key_env) or None

    async def advise(self, params: LadderParameters, findings: Iterable[ValidationFinding]) -> NarrativeResult:
        if not self.cfg.enabled:
            return NarrativeResult(text=FALLBACK_MESSAGE, ok=False)
        key = self.api_key
        if key is None:
            logger.warning("narrative report skipped: %s is not set", self.cfg.api_key_env)
            return NarrativeResult(text=FALLBACK_MESSAGE, ok=False)

        prompt = build_prompt(params, findings)
        body = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            async with httpx.AsyncClient(
                base_url=self.cfg.base_url,
                timeout=float(self.cfg.timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    f"/models/{self.cfg.model}:generateContent",
                    params={"key": key},
                    json=body,
                )
                response.raise_for_status()
                text = _extract_text(response.json())
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError):
            logger.exception("narrative report request failed")
            return NarrativeResult(text=FALLBACK_MESSAGE, ok=False, model=self.cfg.model)

        return NarrativeResult(text=text, ok=True, model=self.cfg.model)
