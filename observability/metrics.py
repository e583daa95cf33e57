from __future__ import annotations

import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUESTS_TOTAL: Counter | None = None
REQUEST_LATENCY: Histogram | None = None
RATE_LIMITED_TOTAL: Counter | None = None
EVALUATIONS_TOTAL: Counter | None = None
FAILED_FINDINGS_TOTAL: Counter | None = None


def setup_metrics() -> None:
    global REQUESTS_TOTAL, REQUEST_LATENCY, RATE_LIMITED_TOTAL, EVALUATIONS_TOTAL, FAILED_FINDINGS_TOTAL

    if REQUESTS_TOTAL is None:
        REQUESTS_TOTAL = Counter(
            "http_requests_total", "Total HTTP requests", ["method", "path", "status"]
        )

    if REQUEST_LATENCY is None:
        REQUEST_LATENCY = Histogram(
            "http_request_duration_seconds", "HTTP request latency", ["method", "path"]
        )

    if RATE_LIMITED_TOTAL is None:
        RATE_LIMITED_TOTAL = Counter(
            "http_rate_limited_total", "Total rate limited requests", ["path"]
        )

    if EVALUATIONS_TOTAL is None:
        EVALUATIONS_TOTAL = Counter(
            "ladder_evaluations_total", "Ladder evaluations served", ["standard", "mode"]
        )

    if FAILED_FINDINGS_TOTAL is None:
        FAILED_FINDINGS_TOTAL = Counter(
            "ladder_failed_findings_total", "Failed compliance findings", ["standard", "rule"]
        )


def record_evaluation(standard: str, mode: str, failed_rules: list[str]) -> None:
    if EVALUATIONS_TOTAL is not None:
        EVALUATIONS_TOTAL.labels(standard, mode).inc()
    if FAILED_FINDINGS_TOTAL is not None:
        for rule in failed_rules:
            FAILED_FINDINGS_TOTAL.labels(standard, rule).inc()


async def metrics_middleware(request: Request, call_next: Callable) -> Response:
    t0 = time.perf_counter()
    response = await call_next(request)
    dt = max(0.0, float(time.perf_counter() - t0))

    if REQUESTS_TOTAL is not None:
        REQUESTS_TOTAL.labels(request.method, request.url.path, str(response.status_code)).inc()

    if REQUEST_LATENCY is not None:
        REQUEST_LATENCY.labels(request.method, request.url.path).observe(dt)

    return response


def metrics_response() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
