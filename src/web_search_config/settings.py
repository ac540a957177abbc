"""
Provider-level web search settings.

Combines the per-provider resolvers into a single ``ResolvedSearchSettings``
for the selected provider. Everything here is total: absent or malformed
values fall back to defaults, and a missing API key is reported as None.
``require_api_key`` is the one place that turns a missing key into an error.
"""

import logging
import math
from typing import Any, Dict, Optional

from .env import (
    BRAVE_API_KEY_ENV, EnvLookup, OPENROUTER_API_KEY_ENV, PERPLEXITY_API_KEY_ENV,
    SERPAPI_API_KEY_ENV, normalize_secret, read_env
)
from .exceptions import MissingApiKeyError
from .models import ResolvedSearchSettings, SearchConfig, SearchProvider
from .perplexity import (
    resolve_perplexity_api_key, resolve_perplexity_base_url, resolve_perplexity_model
)
from .serpapi import resolve_serpapi_api_key, resolve_serpapi_engine

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PROVIDER = SearchProvider.BRAVE
DEFAULT_SEARCH_COUNT = 5
MAX_SEARCH_COUNT = 10
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_CACHE_TTL_MINUTES = 15

_MISSING_KEY_HINTS: Dict[SearchProvider, Dict[str, str]] = {
    SearchProvider.BRAVE: {
        "env_var": BRAVE_API_KEY_ENV,
        "config_field": "search.api_key"
    },
    SearchProvider.PERPLEXITY: {
        "env_var": f"{PERPLEXITY_API_KEY_ENV} or {OPENROUTER_API_KEY_ENV}",
        "config_field": "search.perplexity.api_key"
    },
    SearchProvider.SERPAPI: {
        "env_var": SERPAPI_API_KEY_ENV,
        "config_field": "search.serpapi.api_key"
    },
}


def _finite_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def resolve_search_enabled(config: Optional[SearchConfig]) -> bool:
    """Web search is enabled unless configuration explicitly turns it off."""
    if config is not None and isinstance(config.enabled, bool):
        return config.enabled
    return True


def resolve_search_provider(config: Optional[SearchConfig]) -> SearchProvider:
    """Return the configured provider, defaulting to Brave for unknown names."""
    raw = config.provider.strip().lower() if config is not None and config.provider else ""
    if not raw:
        return DEFAULT_SEARCH_PROVIDER
    try:
        return SearchProvider(raw)
    except ValueError:
        logger.warning("Unknown search provider %r, falling back to %s", raw, DEFAULT_SEARCH_PROVIDER.value)
        return DEFAULT_SEARCH_PROVIDER


def resolve_brave_api_key(
    config: Optional[SearchConfig],
    env: Optional[EnvLookup] = None
) -> Optional[str]:
    """Return the Brave key from configuration, else from BRAVE_API_KEY."""
    from_config = normalize_secret(config.api_key) if config is not None else None
    return from_config or read_env(BRAVE_API_KEY_ENV, env)


def resolve_search_count(value: Any, fallback: int = DEFAULT_SEARCH_COUNT) -> int:
    """Clamp a requested result count to 1..MAX_SEARCH_COUNT."""
    number = _finite_number(value)
    parsed = number if number is not None else fallback
    return max(1, min(MAX_SEARCH_COUNT, math.floor(parsed)))


def resolve_timeout_seconds(value: Any, fallback: int = DEFAULT_TIMEOUT_SECONDS) -> int:
    """Return a whole number of seconds, at least one."""
    number = _finite_number(value)
    if number is None:
        return fallback
    return max(1, math.floor(number))


def resolve_cache_ttl_ms(value: Any, fallback_minutes: float = DEFAULT_CACHE_TTL_MINUTES) -> int:
    """Convert a cache lifetime in minutes to milliseconds, never negative."""
    number = _finite_number(value)
    minutes = max(0, number) if number is not None else fallback_minutes
    return round(minutes * 60_000)


def resolve_search_settings(
    config: Optional[SearchConfig],
    env: Optional[EnvLookup] = None
) -> ResolvedSearchSettings:
    """
    Resolve every setting the HTTP collaborator needs for one search.

    Args:
        config: Web search configuration, may be None
        env: Environment lookup, defaults to the process environment

    Returns:
        ResolvedSearchSettings for the selected provider
    """
    provider = resolve_search_provider(config)
    common = {
        "enabled": resolve_search_enabled(config),
        "provider": provider,
        "count": resolve_search_count(config.max_results if config else None),
        "timeout_seconds": resolve_timeout_seconds(config.timeout_seconds if config else None),
        "cache_ttl_ms": resolve_cache_ttl_ms(config.cache_ttl_minutes if config else None),
    }

    if provider is SearchProvider.PERPLEXITY:
        perplexity = config.perplexity if config else None
        resolved_key = resolve_perplexity_api_key(perplexity, env)
        settings = ResolvedSearchSettings(
            api_key=resolved_key.api_key,
            key_source=resolved_key.source,
            base_url=resolve_perplexity_base_url(perplexity, resolved_key.source, resolved_key.api_key),
            model=resolve_perplexity_model(perplexity),
            **common
        )
    elif provider is SearchProvider.SERPAPI:
        serpapi = config.serpapi if config else None
        settings = ResolvedSearchSettings(
            api_key=resolve_serpapi_api_key(serpapi, env),
            engine=resolve_serpapi_engine(serpapi),
            **common
        )
    else:
        settings = ResolvedSearchSettings(
            api_key=resolve_brave_api_key(config, env),
            **common
        )

    logger.debug(
        "Resolved web search settings: provider=%s key=%s base_url=%s engine=%s",
        provider.value,
        "present" if settings.has_api_key() else "missing",
        settings.base_url,
        settings.engine
    )
    return settings


def require_api_key(settings: ResolvedSearchSettings) -> str:
    """
    Return the resolved API key or raise MissingApiKeyError.

    Raises:
        MissingApiKeyError: If no key was found for the provider
    """
    if settings.api_key:
        return settings.api_key
    hint = _MISSING_KEY_HINTS[settings.provider]
    raise MissingApiKeyError(
        provider=settings.provider.value,
        env_var=hint["env_var"],
        config_field=hint["config_field"]
    )
