"""Async GitHub API client for the pull request, review and user endpoints."""

import logging
from typing import Dict, List

import httpx

from .errors import AuthError, UpstreamError

DEFAULT_API_URL = 'https://api.github.com'
DEFAULT_TIMEOUT = 30.0


class GitHubAPIClient:
    """Makes authenticated requests against the GitHub REST API.

    The client owns an ``httpx.AsyncClient`` and should be used as an async
    context manager so the connection pool is closed when the run finishes.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_API_URL,
                 timeout: float = DEFAULT_TIMEOUT, transport: httpx.AsyncBaseTransport = None):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            base_url: API root, override for GitHub Enterprise
            timeout: Timeout in seconds applied to every request
            transport: Optional transport, used by tests to stub the network
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.session = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                'Authorization': f'token {token}',
                'Accept': 'application/vnd.github.v3+json',
                'User-Agent': 'open-pull-requests',
            },
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        logging.debug(f"Initialized GitHub API client for {self.base_url}")

    async def __aenter__(self) -> 'GitHubAPIClient':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self.session.aclose()

    async def get_json(self, path: str, params: Dict = None):
        """Make a single GET request and decode its JSON body.

        Args:
            path: Endpoint path relative to the API root
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            UpstreamError: On network failure, non-success status or a body
                that is not valid JSON
        """
        url = f"{self.base_url}{path}"
        logging.debug(f"GET {url}")

        try:
            response = await self.session.get(path, params=params)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Request to {url} failed: {e}", url=url) from e

        if response.is_error:
            raise UpstreamError(
                f"GitHub API error: {response.status_code} - {_error_message(response)} ({url})",
                status_code=response.status_code,
                url=url,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Malformed JSON from {url}: {e}",
                                status_code=response.status_code, url=url) from e

    async def get_list(self, path: str, params: Dict = None) -> List[Dict]:
        """Like ``get_json`` but require the body to be a JSON array."""
        data = await self.get_json(path, params=params)
        if not isinstance(data, list):
            raise UpstreamError(f"Expected a list from {self.base_url}{path}, got {type(data).__name__}",
                                url=f"{self.base_url}{path}")
        return data

    async def list_open_pull_requests(self, repo: str) -> List[Dict]:
        """List the open pull requests of a repository (first page only)."""
        return await self.get_list(f"/repos/{repo}/pulls", params={'state': 'open'})

    async def list_reviews(self, repo: str, pr_number: int) -> List[Dict]:
        """List the reviews left on a pull request."""
        return await self.get_list(f"/repos/{repo}/pulls/{pr_number}/reviews")

    async def get_authenticated_user(self) -> Dict:
        """Fetch the user the token belongs to.

        Raises:
            AuthError: If the token is rejected or the lookup fails for any reason
        """
        try:
            user = await self.get_json('/user')
        except UpstreamError as e:
            if e.status_code in (401, 403):
                raise AuthError(f"GitHub rejected the token: {e}") from e
            raise AuthError(f"Could not resolve the authenticated user: {e}") from e

        if not isinstance(user, dict) or not user.get('login'):
            raise AuthError("Authenticated user response has no login")
        return user


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or 'Unknown error'
    if isinstance(body, dict):
        return body.get('message', 'Unknown error')
    return 'Unknown error'

