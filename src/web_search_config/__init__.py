# Web Search Config Package
__version__ = "0.1.0"

from .models import (
    SearchProvider, KeySource, KeyShape, PerplexityConfig, SerpApiConfig,
    SearchConfig, ResolvedApiKey, ResolvedSearchSettings, mask_api_key
)
from .env import EnvLookup, os_environ_lookup, mapping_lookup, read_env
from .exceptions import SearchConfigError, MissingApiKeyError, ConfigurationError
from .perplexity import (
    classify_api_key, resolve_perplexity_base_url, resolve_perplexity_api_key,
    resolve_perplexity_model, PERPLEXITY_DIRECT_BASE_URL, OPENROUTER_BASE_URL
)
from .freshness import (
    FreshnessKind, ParsedFreshness, parse_freshness, normalize_freshness,
    resolve_freshness
)
from .serpapi import resolve_serpapi_engine, resolve_serpapi_api_key
from .settings import (
    resolve_search_enabled, resolve_search_provider, resolve_brave_api_key,
    resolve_search_count, resolve_timeout_seconds, resolve_cache_ttl_ms,
    resolve_search_settings, require_api_key
)
from .config import ConfigurationLoader, load_config, validate_config

__all__ = [
    "__version__",
    # Data models
    "SearchProvider", "KeySource", "KeyShape", "PerplexityConfig", "SerpApiConfig",
    "SearchConfig", "ResolvedApiKey", "ResolvedSearchSettings", "mask_api_key",
    # Environment
    "EnvLookup", "os_environ_lookup", "mapping_lookup", "read_env",
    # Errors
    "SearchConfigError", "MissingApiKeyError", "ConfigurationError",
    # Perplexity
    "classify_api_key", "resolve_perplexity_base_url", "resolve_perplexity_api_key",
    "resolve_perplexity_model", "PERPLEXITY_DIRECT_BASE_URL", "OPENROUTER_BASE_URL",
    # Freshness
    "FreshnessKind", "ParsedFreshness", "parse_freshness", "normalize_freshness",
    "resolve_freshness",
    # SerpAPI
    "resolve_serpapi_engine", "resolve_serpapi_api_key",
    # Settings
    "resolve_search_enabled", "resolve_search_provider", "resolve_brave_api_key",
    "resolve_search_count", "resolve_timeout_seconds", "resolve_cache_ttl_ms",
    "resolve_search_settings", "require_api_key",
    # Configuration
    "ConfigurationLoader", "load_config", "validate_config"
]
