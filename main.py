from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware

from api.routes_catalog import router as catalog_router
from api.routes_ladder import router as ladder_router
from api.routes_report import router as report_router
from api.state import RuntimeState
from config.load_config import AppConfig
from observability.logging import setup_logging
from observability.metrics import metrics_middleware, metrics_response, setup_metrics
from observability.tracing import setup_tracing

__version__ = "2.0.0"


def create_app(config: AppConfig | None = None) -> FastAPI:
    runtime = RuntimeState.build(config)
    obs_cfg = runtime.config.observability
    setup_logging(level=obs_cfg.log_level, json_logs=obs_cfg.json_logs)

    app = FastAPI(title="Ladder Compliance", version=__version__)
    app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=5)
    app.state.runtime = runtime

    metrics_enabled = bool(obs_cfg.metrics_enabled)
    if metrics_enabled:
        setup_metrics()

    setup_tracing(app, obs_cfg)

    @app.middleware("http")
    async def _metrics(request: Request, call_next):
        if not metrics_enabled:
            return await call_next(request)
        return await metrics_middleware(request, call_next)

    app.include_router(catalog_router)
    app.include_router(ladder_router)
    app.include_router(report_router)

    @app.get("/metrics")
    def metrics():
        if not metrics_enabled:
            return {"status": "disabled"}
        return metrics_response()

    @app.get("/health")
    def health() -> dict[str, object]:
        return {
            "status": "ok",
            "version": app.version,
            "config_source": app.state.runtime.config_source,
        }

    return app


app = create_app()
