"""Exception hierarchy for prtg."""


class PRTemplateError(Exception):
    """Base exception for all prtg errors."""


class GitError(PRTemplateError):
    """Raised when a local Git command fails."""


class GitHubError(PRTemplateError):
    """Raised when a GitHub REST API call fails."""


class LLMError(PRTemplateError):
    """Raised when a content provider call fails or returns nothing usable."""


class ConfigError(PRTemplateError):
    """Raised for configuration a provider cannot work with."""
