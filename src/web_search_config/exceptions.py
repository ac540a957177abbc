"""
Exception classes for web search configuration errors.

Resolvers in this package are total and never raise; these exceptions are
used by the configuration loader, by callers that insist on a usable API key,
and by the command-line interface.
"""


class SearchConfigError(Exception):
    """
    Base exception for web search configuration errors.

    Attributes:
        message: Human-readable error message
        provider: Name of the search provider the error relates to
        context: Additional context information about the error
    """

    def __init__(self, message: str, provider: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message."""
        if self.provider:
            return f"[{self.provider}] {self.message}"
        return self.message

    def to_dict(self) -> dict:
        """Convert the exception to a dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "provider": self.provider,
            "context": self.context
        }


class MissingApiKeyError(SearchConfigError):
    """
    Raised when no API key could be resolved for the selected provider.

    Attributes:
        env_var: Environment variable(s) that would satisfy the requirement
        config_field: Configuration field that would satisfy the requirement
    """

    def __init__(self, provider: str, env_var: str, config_field: str = None, context: dict = None):
        message = f"web_search needs an API key. Set {env_var} in the environment"
        if config_field:
            message += f" or configure {config_field}"
        super().__init__(message + ".", provider, context)
        self.env_var = env_var
        self.config_field = config_field

    def to_dict(self) -> dict:
        """Convert the exception to a dictionary for serialization."""
        result = super().to_dict()
        result.update({
            "env_var": self.env_var,
            "config_field": self.config_field
        })
        return result


class ConfigurationError(SearchConfigError):
    """Raised when a configuration file or mapping cannot be loaded."""
    pass
