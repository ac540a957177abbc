"""
Environment variable lookup used by the resolvers.

Resolvers never touch ``os.environ`` directly. They accept an ``EnvLookup``
callable so tests and callers can supply a snapshot of the environment; when
none is given the live process environment is read at call time.
"""

import os
from typing import Callable, Mapping, Optional

EnvLookup = Callable[[str], Optional[str]]

PERPLEXITY_API_KEY_ENV = "PERPLEXITY_API_KEY"
OPENROUTER_API_KEY_ENV = "OPENROUTER_API_KEY"
SERPAPI_API_KEY_ENV = "SERPAPI_API_KEY"
BRAVE_API_KEY_ENV = "BRAVE_API_KEY"


def os_environ_lookup(name: str) -> Optional[str]:
    """Read a variable from the live process environment."""
    return os.environ.get(name)


def mapping_lookup(mapping: Mapping[str, str]) -> EnvLookup:
    """Build a lookup over a fixed mapping."""
    def lookup(name: str) -> Optional[str]:
        return mapping.get(name)
    return lookup


def read_env(name: str, env: Optional[EnvLookup] = None) -> Optional[str]:
    """
    Read an environment variable, treating blank values as unset.

    Args:
        name: Variable name
        env: Lookup to use, defaults to the process environment

    Returns:
        The stripped value, or None when missing or blank
    """
    lookup = env or os_environ_lookup
    return normalize_secret(lookup(name))


def normalize_secret(value: Optional[str]) -> Optional[str]:
    """Strip a secret value and map empty results to None."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None
