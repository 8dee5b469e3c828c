"""Fetch, enrich and filter open pull requests for one run."""

import logging
from typing import List

from ..api_client import GitHubAPIClient
from ..config import Config
from ..models import PullRequest
from .fetching import enrich_with_reviews, fetch_pull_requests
from .identity import resolve_identity
from .pr_filtering import filter_pull_requests


async def find_open_pull_requests(client: GitHubAPIClient, config: Config) -> List[PullRequest]:
    """Run the whole retrieval and filter pass.

    Args:
        client: GitHub API client authenticated with the configured token
        config: Validated run configuration

    Returns:
        Pull requests passing every active filter
    """
    logging.info(f"Fetching open PRs from {len(config.repos)} repository/repositories")
    pull_requests = await fetch_pull_requests(client, config.repos)
    await enrich_with_reviews(client, pull_requests)

    identity = None
    if config.exclude_already_approved:
        identity = await resolve_identity(client)

    return filter_pull_requests(pull_requests, config.criteria(identity))
