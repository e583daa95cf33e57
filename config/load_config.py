from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


class ServerCfg(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class EngineCfg(BaseModel):
    # Safety factors below this are flagged in evaluation reports.
    min_safety_factor: float = 1.5


class NarrativeCfg(BaseModel):
    enabled: bool = True
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-3-pro-preview"
    # Name of the env var holding the API key; the key itself never lives in YAML.
    api_key_env: str = "GEMINI_API_KEY"
    timeout_seconds: float = 60.0


class RateLimitCfg(BaseModel):
    enabled: bool = True
    # Applies to narrative report requests, per client IP.
    window_seconds: int = 60
    max_requests: int = 10


class ObservabilityCfg(BaseModel):
    json_logs: bool = True
    log_level: str = "INFO"
    metrics_enabled: bool = True
    otel_enabled: bool = False
    otel_service_name: str = "ladder-compliance"
    # If empty => SDK will rely on OTEL_* env vars.
    otel_exporter_otlp_endpoint: str | None = None


class AppConfig(BaseModel):
    server: ServerCfg = Field(default_factory=ServerCfg)
    engine: EngineCfg = Field(default_factory=EngineCfg)
    narrative: NarrativeCfg = Field(default_factory=NarrativeCfg)
    rate_limit: RateLimitCfg = Field(default_factory=RateLimitCfg)
    observability: ObservabilityCfg = Field(default_factory=ObservabilityCfg)


def load_app_config(path: Path) -> AppConfig:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config YAML must be a mapping, got {type(raw).__name__}")
    return AppConfig(**raw)


def find_default_config() -> Path | None:
    """
    Resolution order (first hit wins):
      1) $LADDER_CONFIG
      2) ./config/default.yaml
    """
    env_path = os.getenv("LADDER_CONFIG")
    candidates = [Path(env_path)] if env_path else []
    candidates.append(Path("config") / "default.yaml")
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    return None
