from __future__ import annotations

import os
import threading
import time
from typing import Dict, Optional, Tuple

from fastapi import Header, HTTPException, Request

from freightcheck.version import __version__

ENGINE_VERSION = os.getenv("FREIGHTCHECK_ENGINE_VERSION", __version__)


def _parse_api_keys(raw: str | None) -> set[str]:
    if not raw:
        return set()
    return {key.strip() for key in raw.split(",") if key.strip()}


def allowed_api_keys() -> set[str]:
    """Return the configured API keys from env or fallback to a dev key."""

    keys = _parse_api_keys(os.getenv("FREIGHTCHECK_API_KEYS"))
    if not keys:
        keys = {"dev-key"}
    return keys


def _window_from_env(default: int = 60) -> int:
    raw = os.getenv("FREIGHTCHECK_RATE_WINDOW_SEC")
    if not raw:
        return default
    try:
        return max(1, int(raw))
    except ValueError:
        return default


class RateLimiter:
    """In-process fixed-window limiter keyed by (api_key, route template).

    Counters only cover the active window; they are dropped when the window
    rolls over, so memory is bounded by keys times routes.
    """

    def __init__(self, rate_per_window: int = 60, window_seconds: int | None = None) -> None:
        self.rate_per_window = max(1, rate_per_window)
        self.window_seconds = max(1, window_seconds or _window_from_env())
        self._lock = threading.Lock()
        self._window = self._current_window()
        self._counters: Dict[Tuple[str, str], int] = {}

    def _current_window(self) -> int:
        return int(time.time() // self.window_seconds)

    @property
    def tracked_buckets(self) -> int:
        return len(self._counters)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()

    def check(self, api_key: str, route: str) -> None:
        window = self._current_window()
        key = (api_key, route)
        with self._lock:
            if window != self._window:
                self._counters.clear()
                self._window = window

            count = self._counters.get(key, 0)
            if count >= self.rate_per_window:
                raise HTTPException(
                    status_code=429,
                    detail={
                        "message": "Rate limit exceeded",
                        "limit": self.rate_per_window,
                        "window_seconds": self.window_seconds,
                        "route": route,
                    },
                )
            self._counters[key] = count + 1


def route_template(request: Request) -> str:
    """Path template of the matched route, e.g. ``/api/compliance/countries/{code}``."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


rate_limiter = RateLimiter(
    rate_per_window=int(os.getenv("FREIGHTCHECK_RATE_LIMIT_PER_MINUTE", "60"))
)


def require_api_key(
    request: Request, x_api_key: Optional[str] = Header(None)
) -> str:
    """Validate the provided API key and enforce per-route rate limits."""

    if not x_api_key:
        raise HTTPException(status_code=401, detail={"message": "Missing API key"})
    if x_api_key not in allowed_api_keys():
        raise HTTPException(status_code=401, detail={"message": "Invalid API key"})

    rate_limiter.check(x_api_key, route_template(request))
    return x_api_key


def set_rate_limit(limit: int, window_seconds: int | None = None) -> None:
    """Utility hook for tests to reconfigure the limiter."""

    global rate_limiter
    rate_limiter = RateLimiter(rate_per_window=max(1, int(limit)), window_seconds=window_seconds)
