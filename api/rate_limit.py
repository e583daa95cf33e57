from __future__ import annotations

import time
from dataclasses import dataclass, field

from fastapi import HTTPException, Request

from config.load_config import RateLimitCfg


@dataclass
class _Bucket:
    reset_ts: float
    count: int = 0


@dataclass
class RateLimiter:
    """Fixed-window limiter keyed by client IP."""

    window_seconds: int = 60
    max_requests: int = 10
    enabled: bool = True
    _buckets: dict[str, _Bucket] = field(default_factory=dict)

    def _key(self, request: Request) -> str:
        ip = request.headers.get("x-forwarded-for")
        if ip:
            ip = ip.split(",")[0].strip()
        if not ip and request.client:
            ip = request.client.host
        return "ip:" + (ip or "unknown")

    def check(self, request: Request) -> None:
        if not self.enabled:
            return
        now = float(time.time())
        key = self._key(request)

        bucket = self._buckets.get(key)
        if bucket is None or now >= bucket.reset_ts:
            bucket = _Bucket(reset_ts=now + float(self.window_seconds), count=0)
            self._buckets[key] = bucket

        bucket.count += 1
        if bucket.count > int(self.max_requests):
            retry_after = max(0, int(bucket.reset_ts - now))
            raise HTTPException(
                status_code=429,
                detail={
                    "status": "RATE_LIMITED",
                    "reason": "too_many_requests",
                    "window_seconds": int(self.window_seconds),
                    "max_requests": int(self.max_requests),
                    "retry_after_seconds": retry_after,
                },
                headers={"Retry-After": str(retry_after)},
            )


def build_rate_limiter(cfg: RateLimitCfg) -> RateLimiter:
    return RateLimiter(
        window_seconds=int(cfg.window_seconds),
        max_requests=int(cfg.max_requests),
        enabled=bool(cfg.enabled),
    )
