"""
Data models for web search configuration.

This module contains the configuration records accepted by the resolvers and
the small value objects they produce. Configuration records are plain,
optional-everything dataclasses because any field may be missing from a
user's configuration; resolved values are frozen.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import json


class SearchProvider(str, Enum):
    """Upstream providers the web search tool can route to."""
    BRAVE = "brave"
    PERPLEXITY = "perplexity"
    SERPAPI = "serpapi"


class KeySource(str, Enum):
    """Where a Perplexity-compatible API key was found."""
    PERPLEXITY_ENV = "perplexity_env"
    OPENROUTER_ENV = "openrouter_env"
    CONFIG = "config"
    NONE = "none"


class KeyShape(str, Enum):
    """Provider guessed from the literal prefix of an API key."""
    DIRECT = "direct"
    OPENROUTER = "openrouter"


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


def _coerce_bool(value: Any) -> Any:
    """Turn boolean-looking strings into bools; anything else is left for validate()."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        if not lowered:
            return None
    return value


def _coerce_number(value: Any, number_type: type) -> Any:
    """Turn numeric strings (e.g. from ${VAR} substitution) into numbers."""
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            return number_type(stripped)
        except ValueError:
            return value
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class PerplexityConfig:
    """
    Configuration for the Perplexity provider.

    Attributes:
        api_key: Perplexity or OpenRouter API key
        base_url: Explicit endpoint, overrides every inferred default
        model: Model name sent with each request
    """
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "api_key": self.api_key,
            "base_url": self.base_url,
            "model": self.model
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PerplexityConfig":
        """Create configuration from dictionary."""
        data = data or {}
        return cls(
            api_key=_optional_str(data.get("api_key")),
            base_url=_optional_str(data.get("base_url")),
            model=_optional_str(data.get("model"))
        )


@dataclass
class SerpApiConfig:
    """
    Configuration for the SerpAPI provider.

    Attributes:
        api_key: SerpAPI key
        engine: SerpAPI engine name (google, bing, yahoo, ...)
    """
    api_key: Optional[str] = None
    engine: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "api_key": self.api_key,
            "engine": self.engine
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SerpApiConfig":
        """Create configuration from dictionary."""
        data = data or {}
        return cls(
            api_key=_optional_str(data.get("api_key")),
            engine=_optional_str(data.get("engine"))
        )


@dataclass
class SearchConfig:
    """
    Top-level web search configuration.

    Attributes:
        enabled: Whether the web search tool is available at all
        provider: Selected provider name
        api_key: Brave Search API key
        max_results: Default number of results per query
        timeout_seconds: Request timeout for the HTTP collaborator
        cache_ttl_minutes: How long responses may be cached
        perplexity: Perplexity-specific settings
        serpapi: SerpAPI-specific settings
    """
    enabled: Optional[bool] = None
    provider: Optional[str] = None
    api_key: Optional[str] = None
    max_results: Optional[int] = None
    timeout_seconds: Optional[int] = None
    cache_ttl_minutes: Optional[float] = None
    perplexity: Optional[PerplexityConfig] = None
    serpapi: Optional[SerpApiConfig] = None

    def validate(self) -> List[str]:
        """Validate the configuration and return any error messages."""
        errors = []

        if self.provider is not None:
            known = [p.value for p in SearchProvider]
            if self.provider.strip().lower() not in known:
                errors.append(f"Unknown search provider '{self.provider}', expected one of: {', '.join(known)}")

        if self.enabled is not None and not isinstance(self.enabled, bool):
            errors.append(f"enabled must be a boolean, got '{self.enabled}'")

        for name in ("max_results", "timeout_seconds", "cache_ttl_minutes"):
            value = getattr(self, name)
            if value is not None and not _is_number(value):
                errors.append(f"{name} must be a number, got '{value}'")

        if _is_number(self.max_results) and self.max_results <= 0:
            errors.append("max_results must be positive")

        if _is_number(self.timeout_seconds) and self.timeout_seconds <= 0:
            errors.append("timeout_seconds must be positive")

        if _is_number(self.cache_ttl_minutes) and self.cache_ttl_minutes < 0:
            errors.append("cache_ttl_minutes cannot be negative")

        return errors

    def is_valid(self) -> bool:
        """Check if the configuration is valid."""
        return len(self.validate()) == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "enabled": self.enabled,
            "provider": self.provider,
            "api_key": self.api_key,
            "max_results": self.max_results,
            "timeout_seconds": self.timeout_seconds,
            "cache_ttl_minutes": self.cache_ttl_minutes,
            "perplexity": self.perplexity.to_dict() if self.perplexity else None,
            "serpapi": self.serpapi.to_dict() if self.serpapi else None
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SearchConfig":
        """Create configuration from dictionary."""
        data = data or {}
        perplexity = data.get("perplexity")
        serpapi = data.get("serpapi")
        return cls(
            enabled=_coerce_bool(data.get("enabled")),
            provider=_optional_str(data.get("provider")),
            api_key=_optional_str(data.get("api_key")),
            max_results=_coerce_number(data.get("max_results"), int),
            timeout_seconds=_coerce_number(data.get("timeout_seconds"), int),
            cache_ttl_minutes=_coerce_number(data.get("cache_ttl_minutes"), float),
            perplexity=PerplexityConfig.from_dict(perplexity) if perplexity is not None else None,
            serpapi=SerpApiConfig.from_dict(serpapi) if serpapi is not None else None
        )


@dataclass(frozen=True)
class ResolvedApiKey:
    """An API key together with the place it was found."""
    api_key: Optional[str]
    source: KeySource


@dataclass(frozen=True)
class ResolvedSearchSettings:
    """
    Fully resolved settings handed to the HTTP collaborator.

    Attributes:
        enabled: Whether web search is enabled
        provider: Selected provider
        api_key: Key to present upstream, None when nothing was found
        key_source: Where a Perplexity key came from (None for other providers)
        base_url: Perplexity-compatible endpoint (Perplexity only)
        model: Perplexity model (Perplexity only)
        engine: SerpAPI engine (SerpAPI only)
        count: Number of results to request
        timeout_seconds: Request timeout
        cache_ttl_ms: Cache lifetime in milliseconds
    """
    enabled: bool
    provider: SearchProvider
    api_key: Optional[str]
    count: int
    timeout_seconds: int
    cache_ttl_ms: int
    key_source: Optional[KeySource] = None
    base_url: Optional[str] = None
    model: Optional[str] = None
    engine: Optional[str] = None

    def has_api_key(self) -> bool:
        """Check if an API key was resolved."""
        return bool(self.api_key)

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Convert settings to dictionary, masking the API key by default."""
        return {
            "enabled": self.enabled,
            "provider": self.provider.value,
            "api_key": mask_api_key(self.api_key) if mask_secrets else self.api_key,
            "key_source": self.key_source.value if self.key_source else None,
            "base_url": self.base_url,
            "model": self.model,
            "engine": self.engine,
            "count": self.count,
            "timeout_seconds": self.timeout_seconds,
            "cache_ttl_ms": self.cache_ttl_ms
        }

    def to_json(self, mask_secrets: bool = True) -> str:
        """Convert settings to JSON string."""
        return json.dumps(self.to_dict(mask_secrets=mask_secrets))


def mask_api_key(api_key: Optional[str]) -> Optional[str]:
    """Hide all but the first four characters of an API key."""
    if not api_key:
        return None
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return api_key[:4] + "*" * (len(api_key) - 4)
