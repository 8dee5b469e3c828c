"""Error types raised while finding open pull requests."""

from typing import Optional


class OpenPullRequestsError(Exception):
    """Base class for all errors raised by this tool."""


class ConfigError(OpenPullRequestsError):
    """Missing or invalid command line / environment input."""


class AuthError(OpenPullRequestsError):
    """The token was rejected or the authenticated user could not be resolved."""


class UpstreamError(OpenPullRequestsError):
    """A GitHub API retrieval failed or returned something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
