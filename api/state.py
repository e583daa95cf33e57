from __future__ import annotations

from dataclasses import dataclass, field

from api.rate_limit import RateLimiter, build_rate_limiter
from config.load_config import AppConfig, find_default_config, load_app_config
from report.advisor import NarrativeAdvisor


@dataclass
class RuntimeState:
    config: AppConfig = field(default_factory=AppConfig)
    config_source: str | None = None

    # Narrative report requests only; engine endpoints are not limited.
    rate_limiter: RateLimiter = field(default_factory=RateLimiter)
    advisor: NarrativeAdvisor | None = None

    @classmethod
    def build(cls, config: AppConfig | None = None) -> "RuntimeState":
        config_source = None
        if config is None:
            cfg_path = find_default_config()
            if cfg_path is not None:
                config = load_app_config(cfg_path)
                config_source = str(cfg_path).replace("\\", "/")
            else:
                config = AppConfig()

        return cls(
            config=config,
            config_source=config_source,
            rate_limiter=build_rate_limiter(config.rate_limit),
            advisor=NarrativeAdvisor(config.narrative),
        )

    def status(self) -> dict:
        return {"source": self.config_source, "config": self.config.model_dump()}
