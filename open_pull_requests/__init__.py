"""Open Pull Requests - list GitHub pull requests that need your attention."""

from .models import FilterCriteria, Label, PullRequest, Review
from .api_client import GitHubAPIClient
from .config import Config
from .errors import AuthError, ConfigError, OpenPullRequestsError, UpstreamError
from .output import OutputFormatter

__version__ = '1.0.0'

__all__ = [
    'FilterCriteria',
    'Label',
    'PullRequest',
    'Review',
    'GitHubAPIClient',
    'Config',
    'AuthError',
    'ConfigError',
    'OpenPullRequestsError',
    'UpstreamError',
    'OutputFormatter',
]
