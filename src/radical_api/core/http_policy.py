"""Response header policy: CORS headers and per-path cache rules."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from radical_api.core.settings import Settings, settings

NO_STORE = "no-store"

# Cache-Control by exact request path for successful GET responses.
CACHE_RULES: Mapping[str, str] = MappingProxyType(
    {
        "/api/health": "public, max-age=3600",
        "/api/proposals": "public, max-age=300, stale-while-revalidate=60",
        "/api/comments": "public, max-age=60, stale-while-revalidate=30",
    }
)


@dataclass(frozen=True)
class HttpPolicy:
    """Immutable header policy built once at process start."""

    cors_headers: Mapping[str, str]
    cache_rules: Mapping[str, str]
    default_cache_control: str

    def cache_control_for(self, method: str, path: str, status_code: int) -> str:
        """Pick the Cache-Control value for a response without one of its own."""
        if method != "GET" or status_code >= 400:
            return NO_STORE
        return self.cache_rules.get(path, self.default_cache_control)


def load_http_policy(config: Settings | None = None) -> HttpPolicy:
    """Build the header policy from application settings."""
    config = config or settings
    cors_headers = {
        "Access-Control-Allow-Origin": config.cors_allow_origin,
        "Access-Control-Allow-Methods": ", ".join(config.cors_allow_methods),
        "Access-Control-Allow-Headers": ", ".join(config.cors_allow_headers),
        "Access-Control-Max-Age": str(config.cors_max_age),
    }
    return HttpPolicy(
        cors_headers=MappingProxyType(cors_headers),
        cache_rules=CACHE_RULES,
        default_cache_control=config.default_cache_control,
    )
