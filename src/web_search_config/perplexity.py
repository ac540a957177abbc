"""
Perplexity endpoint, key and model resolution.

A Perplexity-compatible client can talk either to Perplexity directly or to
an OpenRouter proxy that serves the same models. The endpoint is chosen by an
ordered chain of strategies, each of which either returns a URL or passes:

1. an explicit ``base_url`` in configuration,
2. the environment variable the key was read from,
3. the shape of the key itself,
4. the OpenRouter default, which accepts the widest range of credentials.
"""

import logging
from typing import Callable, List, Optional, Union

from .env import (
    EnvLookup, OPENROUTER_API_KEY_ENV, PERPLEXITY_API_KEY_ENV,
    normalize_secret, read_env
)
from .models import KeyShape, KeySource, PerplexityConfig, ResolvedApiKey

logger = logging.getLogger(__name__)

PERPLEXITY_DIRECT_BASE_URL = "https://api.perplexity.ai"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_PERPLEXITY_BASE_URL = OPENROUTER_BASE_URL
DEFAULT_PERPLEXITY_MODEL = "perplexity/sonar-pro"

PERPLEXITY_KEY_PREFIXES = ("pplx-",)
OPENROUTER_KEY_PREFIXES = ("sk-or-v1-",)

BaseUrlStrategy = Callable[[Optional[PerplexityConfig], Optional[KeySource], Optional[str]], Optional[str]]


def classify_api_key(api_key: Optional[str]) -> Optional[KeyShape]:
    """
    Guess which provider issued an API key from its literal prefix.

    Args:
        api_key: The key to inspect

    Returns:
        KeyShape.DIRECT for Perplexity keys, KeyShape.OPENROUTER for
        OpenRouter keys, None when the shape is unknown or the key is empty
    """
    if not api_key:
        return None
    if api_key.startswith(PERPLEXITY_KEY_PREFIXES):
        return KeyShape.DIRECT
    if api_key.startswith(OPENROUTER_KEY_PREFIXES):
        return KeyShape.OPENROUTER
    return None


def _coerce_source(source: Union[KeySource, str, None]) -> Optional[KeySource]:
    if source is None or isinstance(source, KeySource):
        return source
    try:
        return KeySource(source)
    except ValueError:
        logger.debug("Unrecognized key source %r, treating it as configuration", source)
        return None


def _from_explicit_config(config, source, api_key) -> Optional[str]:
    if config is not None and config.base_url:
        return config.base_url
    return None


def _from_env_source(config, source, api_key) -> Optional[str]:
    if source is KeySource.PERPLEXITY_ENV:
        return PERPLEXITY_DIRECT_BASE_URL
    if source is KeySource.OPENROUTER_ENV:
        return OPENROUTER_BASE_URL
    return None


def _from_key_shape(config, source, api_key) -> Optional[str]:
    if classify_api_key(api_key) is KeyShape.DIRECT:
        return PERPLEXITY_DIRECT_BASE_URL
    return None


def _default_base_url(config, source, api_key) -> Optional[str]:
    return DEFAULT_PERPLEXITY_BASE_URL


BASE_URL_STRATEGIES: List[BaseUrlStrategy] = [
    _from_explicit_config,
    _from_env_source,
    _from_key_shape,
    _default_base_url,
]


def resolve_perplexity_base_url(
    config: Optional[PerplexityConfig],
    source: Union[KeySource, str, None],
    api_key: Optional[str] = None
) -> str:
    """
    Pick the base URL a Perplexity-compatible client should target.

    Args:
        config: Perplexity configuration, may be None
        source: Where the API key came from (KeySource or its string value)
        api_key: The key itself, consulted only when the source is generic

    Returns:
        The first URL produced by BASE_URL_STRATEGIES
    """
    key_source = _coerce_source(source)
    for strategy in BASE_URL_STRATEGIES:
        base_url = strategy(config, key_source, api_key)
        if base_url is not None:
            logger.debug("Perplexity base URL %s chosen by %s", base_url, strategy.__name__)
            return base_url
    # The last strategy always answers.
    return DEFAULT_PERPLEXITY_BASE_URL


def resolve_perplexity_api_key(
    config: Optional[PerplexityConfig],
    env: Optional[EnvLookup] = None
) -> ResolvedApiKey:
    """
    Find a Perplexity-compatible API key and record where it came from.

    Configuration wins over PERPLEXITY_API_KEY, which wins over
    OPENROUTER_API_KEY.
    """
    from_config = normalize_secret(config.api_key) if config is not None else None
    if from_config:
        return ResolvedApiKey(api_key=from_config, source=KeySource.CONFIG)

    from_perplexity_env = read_env(PERPLEXITY_API_KEY_ENV, env)
    if from_perplexity_env:
        return ResolvedApiKey(api_key=from_perplexity_env, source=KeySource.PERPLEXITY_ENV)

    from_openrouter_env = read_env(OPENROUTER_API_KEY_ENV, env)
    if from_openrouter_env:
        return ResolvedApiKey(api_key=from_openrouter_env, source=KeySource.OPENROUTER_ENV)

    return ResolvedApiKey(api_key=None, source=KeySource.NONE)


def resolve_perplexity_model(config: Optional[PerplexityConfig]) -> str:
    """Return the configured model, or the default when unset or blank."""
    model = config.model.strip() if config is not None and config.model else ""
    return model or DEFAULT_PERPLEXITY_MODEL
