"""
Shared fixtures: GitHub API payload builders and a fake GitHub served
through ``httpx.MockTransport``.
"""

import asyncio
import re

import httpx
import pytest

from open_pull_requests.api_client import GitHubAPIClient
from open_pull_requests.models import PullRequest, Review, Label


def pr_item(number, author, repo='test/repo', title=None, labels=()):
    """A pull request object as returned by GET /repos/:repo/pulls."""
    return {
        'number': number,
        'user': {'login': author},
        'title': title or f'PR {number}',
        'html_url': f'https://github.com/{repo}/pull/{number}',
        'labels': [{'name': name} for name in labels],
        'head': {'repo': {'full_name': repo}},
        'base': {'repo': {'full_name': repo}},
    }


def review_item(login, state='APPROVED'):
    """A review object as returned by GET /repos/:repo/pulls/:n/reviews."""
    return {'user': {'login': login}, 'state': state}


class FakeGitHub:
    """Serves canned responses for the three endpoints the tool uses."""

    PULLS = re.compile(r'^/repos/([^/]+/[^/]+)/pulls$')
    REVIEWS = re.compile(r'^/repos/([^/]+/[^/]+)/pulls/(\d+)/reviews$')

    def __init__(self):
        self.pulls = {}
        self.reviews = {}
        self.user = {'login': 'me'}
        self.failures = {}  # path -> status code
        self.redirects = {}  # path -> Location of a 301
        self.delays = {}  # path -> seconds
        self.requests = []
        self.completed = []

    def add_pull(self, repo, number, author, title=None, labels=(), reviews=()):
        self.pulls.setdefault(repo, []).append(pr_item(number, author, repo, title, labels))
        self.reviews[(repo, number)] = list(reviews)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(request)

        if path in self.delays:
            await asyncio.sleep(self.delays[path])
        self.completed.append(path)

        if path in self.redirects:
            return httpx.Response(301, headers={'Location': self.redirects[path]},
                                  json={'message': 'Moved Permanently'})

        if path in self.failures:
            return httpx.Response(self.failures[path], json={'message': 'Boom'})

        if path == '/user':
            return httpx.Response(200, json=self.user)

        match = self.PULLS.match(path)
        if match:
            return httpx.Response(200, json=self.pulls.get(match.group(1), []))

        match = self.REVIEWS.match(path)
        if match:
            key = (match.group(1), int(match.group(2)))
            return httpx.Response(200, json=self.reviews.get(key, []))

        return httpx.Response(404, json={'message': 'Not Found'})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self):
        return [request.url.path for request in self.requests]


@pytest.fixture
def github():
    """A fake GitHub with no data."""
    return FakeGitHub()


@pytest.fixture
def scenario_github(github):
    """One repository with three PRs.

    #1 alice [bug], two approvals; #2 bob [feature], no reviews;
    #3 alice [bug, feature], one approval by alice.
    """
    github.add_pull('acme/widgets', 1, 'alice', labels=['bug'],
                    reviews=[review_item('carol'), review_item('dave')])
    github.add_pull('acme/widgets', 2, 'bob', labels=['feature'])
    github.add_pull('acme/widgets', 3, 'alice', labels=['bug', 'feature'],
                    reviews=[review_item('alice')])
    return github


@pytest.fixture
def make_client():
    """Factory for API clients talking to a fake GitHub."""
    def factory(fake, token='test_token'):
        return GitHubAPIClient(token, transport=fake.transport)
    return factory


@pytest.fixture
def make_pr():
    """Factory for PullRequest objects with reviews already attached."""
    def factory(number, author='alice', labels=(), reviews=(), title=None, repo='test/repo'):
        return PullRequest(
            number=number,
            author=author,
            title=title or f'PR {number}',
            repository=repo,
            base_repository=repo,
            url=f'https://github.com/{repo}/pull/{number}',
            labels=[Label(name) for name in labels],
            reviews=[Review(login, state) for login, state in reviews],
        )
    return factory
