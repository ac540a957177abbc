"""
Unit tests for provider-level settings resolution.
"""

import math

import pytest

from web_search_config.env import mapping_lookup
from web_search_config.exceptions import MissingApiKeyError
from web_search_config.models import (
    KeySource, PerplexityConfig, SearchConfig, SearchProvider, SerpApiConfig
)
from web_search_config.perplexity import OPENROUTER_BASE_URL, PERPLEXITY_DIRECT_BASE_URL
from web_search_config.settings import (
    require_api_key,
    resolve_brave_api_key,
    resolve_cache_ttl_ms,
    resolve_search_count,
    resolve_search_enabled,
    resolve_search_provider,
    resolve_search_settings,
    resolve_timeout_seconds,
)


class TestScalarResolvers:
    """Test cases for enabled flag, provider, count, timeout and cache TTL."""

    def test_enabled_by_default(self):
        """Test that search is enabled unless explicitly disabled."""
        assert resolve_search_enabled(None) is True
        assert resolve_search_enabled(SearchConfig()) is True
        assert resolve_search_enabled(SearchConfig(enabled=False)) is False

    def test_provider_selection(self):
        """Test provider parsing and fallback."""
        assert resolve_search_provider(None) is SearchProvider.BRAVE
        assert resolve_search_provider(SearchConfig(provider=" Perplexity ")) is SearchProvider.PERPLEXITY
        assert resolve_search_provider(SearchConfig(provider="serpapi")) is SearchProvider.SERPAPI
        assert resolve_search_provider(SearchConfig(provider="bing")) is SearchProvider.BRAVE

    @pytest.mark.parametrize("value,expected", [
        (None, 5), (3, 3), (0, 1), (-4, 1), (25, 10), (7.9, 7), ("8", 5), (True, 5), (math.nan, 5)
    ])
    def test_search_count(self, value, expected):
        """Test clamping of the result count."""
        assert resolve_search_count(value) == expected

    def test_timeout_seconds(self):
        """Test timeout flooring and fallback."""
        assert resolve_timeout_seconds(None) == 30
        assert resolve_timeout_seconds(12.7) == 12
        assert resolve_timeout_seconds(0) == 1
        assert resolve_timeout_seconds("10", fallback=20) == 20

    def test_cache_ttl_ms(self):
        """Test minutes to milliseconds conversion."""
        assert resolve_cache_ttl_ms(None) == 15 * 60_000
        assert resolve_cache_ttl_ms(1) == 60_000
        assert resolve_cache_ttl_ms(0.5) == 30_000
        assert resolve_cache_ttl_ms(-3) == 0


class TestResolveBraveApiKey:
    """Test cases for Brave key resolution."""

    def test_config_then_env(self):
        """Test that configuration beats BRAVE_API_KEY."""
        env = mapping_lookup({"BRAVE_API_KEY": "brave-env"})
        assert resolve_brave_api_key(SearchConfig(api_key="brave-config"), env) == "brave-config"
        assert resolve_brave_api_key(SearchConfig(), env) == "brave-env"
        assert resolve_brave_api_key(None, mapping_lookup({})) is None


class TestResolveSearchSettings:
    """Test cases for composed settings."""

    def test_brave_defaults(self):
        """Test resolution with no configuration at all."""
        settings = resolve_search_settings(None, env=mapping_lookup({}))
        assert settings.enabled is True
        assert settings.provider is SearchProvider.BRAVE
        assert settings.api_key is None
        assert settings.count == 5
        assert settings.timeout_seconds == 30
        assert settings.cache_ttl_ms == 900_000
        assert settings.base_url is None
        assert settings.engine is None

    def test_perplexity_from_perplexity_env(self):
        """Test that a PERPLEXITY_API_KEY routes to the direct endpoint."""
        config = SearchConfig(provider="perplexity")
        env = mapping_lookup({"PERPLEXITY_API_KEY": "sk-or-v1-odd"})
        settings = resolve_search_settings(config, env=env)
        assert settings.api_key == "sk-or-v1-odd"
        assert settings.key_source is KeySource.PERPLEXITY_ENV
        assert settings.base_url == PERPLEXITY_DIRECT_BASE_URL
        assert settings.model == "perplexity/sonar-pro"

    def test_perplexity_config_key_shape(self):
        """Test that a configured pplx- key routes to the direct endpoint."""
        config = SearchConfig(provider="perplexity", perplexity=PerplexityConfig(api_key="pplx-abc", model="sonar"))
        settings = resolve_search_settings(config, env=mapping_lookup({}))
        assert settings.key_source is KeySource.CONFIG
        assert settings.base_url == PERPLEXITY_DIRECT_BASE_URL
        assert settings.model == "sonar"

    def test_perplexity_without_key(self):
        """Test that a missing key still yields the OpenRouter default."""
        settings = resolve_search_settings(SearchConfig(provider="perplexity"), env=mapping_lookup({}))
        assert settings.api_key is None
        assert settings.key_source is KeySource.NONE
        assert settings.base_url == OPENROUTER_BASE_URL

    def test_serpapi(self):
        """Test SerpAPI engine and key resolution."""
        config = SearchConfig(provider="serpapi", max_results=20, serpapi=SerpApiConfig(engine=" bing "))
        settings = resolve_search_settings(config, env=mapping_lookup({"SERPAPI_API_KEY": "env-key"}))
        assert settings.provider is SearchProvider.SERPAPI
        assert settings.engine == "bing"
        assert settings.api_key == "env-key"
        assert settings.count == 10
        assert settings.key_source is None

    def test_to_dict_masks_api_key(self):
        """Test that serialized settings do not leak the key."""
        config = SearchConfig(api_key="brave-secret-key")
        settings = resolve_search_settings(config, env=mapping_lookup({}))
        assert settings.to_dict()["api_key"] == "brav************"
        assert settings.to_dict(mask_secrets=False)["api_key"] == "brave-secret-key"
        assert settings.to_dict()["provider"] == "brave"


class TestRequireApiKey:
    """Test cases for turning a missing key into an error."""

    def test_returns_key_when_present(self):
        """Test that a resolved key is returned."""
        settings = resolve_search_settings(SearchConfig(api_key="k"), env=mapping_lookup({}))
        assert require_api_key(settings) == "k"

    @pytest.mark.parametrize("provider,env_var", [
        ("brave", "BRAVE_API_KEY"),
        ("perplexity", "PERPLEXITY_API_KEY or OPENROUTER_API_KEY"),
        ("serpapi", "SERPAPI_API_KEY"),
    ])
    def test_raises_with_provider_hint(self, provider, env_var):
        """Test that the error names the environment variable to set."""
        settings = resolve_search_settings(SearchConfig(provider=provider), env=mapping_lookup({}))
        with pytest.raises(MissingApiKeyError) as exc_info:
            require_api_key(settings)
        error = exc_info.value
        assert error.provider == provider
        assert error.env_var == env_var
        assert env_var in str(error)
        assert error.to_dict()["error_type"] == "MissingApiKeyError"
