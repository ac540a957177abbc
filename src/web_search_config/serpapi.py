"""SerpAPI engine and API key resolution."""

import logging
from typing import Optional

from .env import EnvLookup, SERPAPI_API_KEY_ENV, normalize_secret, read_env
from .models import SerpApiConfig

logger = logging.getLogger(__name__)

DEFAULT_SERPAPI_ENGINE = "google"


def resolve_serpapi_engine(config: Optional[SerpApiConfig]) -> str:
    """
    Return the configured SerpAPI engine, trimmed.

    Falls back to ``google`` when there is no configuration or the engine is
    missing, empty or whitespace only. Case is preserved.
    """
    engine = config.engine.strip() if config is not None and config.engine else ""
    return engine or DEFAULT_SERPAPI_ENGINE


def resolve_serpapi_api_key(
    config: Optional[SerpApiConfig],
    env: Optional[EnvLookup] = None
) -> Optional[str]:
    """
    Return the SerpAPI key from configuration, else from SERPAPI_API_KEY.

    The environment is read on every call.
    """
    from_config = normalize_secret(config.api_key) if config is not None else None
    if from_config:
        return from_config

    from_env = read_env(SERPAPI_API_KEY_ENV, env)
    if from_env:
        logger.debug("Using SerpAPI key from %s", SERPAPI_API_KEY_ENV)
    return from_env
