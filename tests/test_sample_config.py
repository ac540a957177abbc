"""
Integration tests for the sample configuration file.

This module tests that the provided sample configuration file can be loaded
and resolved, ensuring it serves as a working example for users.
"""

import pytest
from pathlib import Path

from web_search_config.config import ConfigurationLoader, load_config
from web_search_config.env import mapping_lookup
from web_search_config.models import KeySource, SearchConfig, SearchProvider
from web_search_config.settings import resolve_search_settings

SAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


class TestSampleConfiguration:
    """Test cases for the sample configuration file."""

    def setup_method(self):
        """Set up test fixtures."""
        self.loader = ConfigurationLoader()

    def test_sample_config_exists(self):
        """Test that the sample configuration file exists."""
        assert SAMPLE_CONFIG.is_file(), "Sample configuration file config.yaml should exist"

    def test_sample_config_loads_successfully(self):
        """Test that the sample configuration loads and validates."""
        config = self.loader.load_from_file(SAMPLE_CONFIG)
        assert isinstance(config, SearchConfig)
        assert config.is_valid()

    def test_sample_config_validation(self):
        """Test that the sample configuration has no validation errors."""
        result = self.loader.validate_config_file(SAMPLE_CONFIG)
        assert result["is_valid"], f"Sample configuration should be valid. Errors: {result['errors']}"

    @pytest.mark.parametrize("env,expected_url,expected_source", [
        ({"PERPLEXITY_API_KEY": "pplx-1"}, "https://api.perplexity.ai", KeySource.PERPLEXITY_ENV),
        ({"OPENROUTER_API_KEY": "sk-or-v1-1"}, "https://openrouter.ai/api/v1", KeySource.OPENROUTER_ENV),
        ({}, "https://openrouter.ai/api/v1", KeySource.NONE),
    ])
    def test_sample_config_resolves_endpoint_from_environment(self, env, expected_url, expected_source):
        """Test that the empty base_url in the sample defers to the key source."""
        config = load_config(SAMPLE_CONFIG)
        settings = resolve_search_settings(config, env=mapping_lookup(env))

        assert settings.provider is SearchProvider.PERPLEXITY
        assert settings.base_url == expected_url
        assert settings.key_source is expected_source
        assert settings.model == "perplexity/sonar-pro"
