"""Concurrent retrieval of open pull requests and their reviews."""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, Iterable, List, Sequence, TypeVar

from ..api_client import GitHubAPIClient
from ..errors import UpstreamError
from ..models import PullRequest, Review

T = TypeVar('T')


async def gather_or_cancel(aws: Iterable[Awaitable]) -> List:
    """Await all awaitables concurrently, results in submission order.

    The first failure cancels every task still running and is re-raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


def _parse(build: Callable[[Dict], T], items: List[Dict], source: str) -> List[T]:
    """Build models from API items; a missing or null field is an upstream error."""
    try:
        return [build(item) for item in items]
    except (KeyError, TypeError, AttributeError) as e:
        raise UpstreamError(f"Malformed item in response from {source}: {e!r}") from e


async def fetch_repository_pull_requests(client: GitHubAPIClient, repo: str) -> List[PullRequest]:
    """Fetch the open pull requests of a single repository.

    Args:
        client: GitHub API client
        repo: Repository in ``owner/name`` form

    Returns:
        Pull requests in API order, without reviews
    """
    items = await client.list_open_pull_requests(repo)
    logging.info(f"Found {len(items)} open PRs in {repo}")
    return _parse(lambda item: PullRequest.from_api(item, repo), items, f"/repos/{repo}/pulls")


async def fetch_pull_requests(client: GitHubAPIClient, repos: Sequence[str]) -> List[PullRequest]:
    """Fetch open pull requests from all repositories concurrently.

    Args:
        client: GitHub API client
        repos: Repositories in ``owner/name`` form

    Returns:
        One flat list, repositories in the order given

    Raises:
        UpstreamError: If any repository could not be listed
    """
    per_repo = await gather_or_cancel(
        fetch_repository_pull_requests(client, repo) for repo in repos
    )
    return [pr for prs in per_repo for pr in prs]


async def fetch_reviews(client: GitHubAPIClient, pull_request: PullRequest) -> List[Review]:
    items = await client.list_reviews(pull_request.base_repository, pull_request.number)
    return _parse(Review.from_api, items,
                  f"/repos/{pull_request.base_repository}/pulls/{pull_request.number}/reviews")


async def enrich_with_reviews(client: GitHubAPIClient, pull_requests: List[PullRequest]) -> List[PullRequest]:
    """Attach each pull request's reviews, fetching them concurrently.

    Results are matched back by position, so the list keeps its order and
    every pull request gets its own reviews regardless of completion order.

    Args:
        client: GitHub API client
        pull_requests: Pull requests to enrich in place

    Returns:
        The same list, enriched

    Raises:
        UpstreamError: If any review listing fails; nothing is attached then
    """
    all_reviews = await gather_or_cancel(fetch_reviews(client, pr) for pr in pull_requests)

    for pull_request, reviews in zip(pull_requests, all_reviews):
        pull_request.reviews = reviews

    logging.debug(f"Attached reviews to {len(pull_requests)} PRs")
    return pull_requests
