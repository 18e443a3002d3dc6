import logging
import math
import time

from fastapi import Depends, Request, Response, status
from limits import RateLimitItem, RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

from shared.core.config import RateLimitRule, Settings, get_settings
from shared.helpers.json_response_helper import error_response

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGES = {
    "auth": "Too many login attempts, please try again later.",
    "admin": "Too many admin requests, please slow down.",
    "general": "Too many requests, please try again later.",
}


def build_rate_limiter(settings: Settings) -> FixedWindowRateLimiter:
    """Counters live in process memory unless a redis uri is configured."""
    return FixedWindowRateLimiter(storage_from_string(settings.RATE_LIMIT_STORAGE_URI))


def limit_item(rule: RateLimitRule) -> RateLimitItem:
    return RateLimitItemPerSecond(rule.max_requests, rule.window_seconds, namespace="rl")


def client_ip(request: Request, settings: Settings = None) -> str:
    settings = settings or request.app.state.settings
    if settings.TRUST_PROXY:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limit(rule_name: str):
    """Dependency enforcing the named rule (auth, admin or general)."""

    def limiter(
        request: Request,
        response: Response,
        settings: Settings = Depends(get_settings),
    ):
        if settings.is_development:
            return

        rule = settings.rate_limit_rule(rule_name)
        item = limit_item(rule)
        identity = client_ip(request, settings)
        rate_limiter: FixedWindowRateLimiter = request.app.state.rate_limiter

        allowed = rate_limiter.hit(item, rule.name, identity)
        stats = rate_limiter.get_window_stats(item, rule.name, identity)
        reset_seconds = max(math.ceil(stats.reset_time - time.time()), 1)

        if not allowed:
            logger.warning("Rate limit %s exceeded for %s on %s",
                           rule.name, identity, request.url.path)
            error_response(
                message=RATE_LIMIT_MESSAGES.get(rule.name, RATE_LIMIT_MESSAGES["general"]),
                error="Too Many Requests",
                http_status=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={
                    "Retry-After": str(reset_seconds),
                    "RateLimit-Limit": str(rule.max_requests),
                    "RateLimit-Remaining": "0",
                    "RateLimit-Reset": str(reset_seconds),
                },
            )

        response.headers["RateLimit-Limit"] = str(rule.max_requests)
        response.headers["RateLimit-Remaining"] = str(max(stats.remaining, 0))
        response.headers["RateLimit-Reset"] = str(reset_seconds)

    return limiter
