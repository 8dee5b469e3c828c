"""Retrieval and filtering of open pull requests."""

from .core import find_open_pull_requests
from .fetching import enrich_with_reviews, fetch_pull_requests, gather_or_cancel
from .identity import resolve_identity
from .pr_filtering import build_filters, filter_pull_requests

__all__ = [
    'find_open_pull_requests',
    'enrich_with_reviews',
    'fetch_pull_requests',
    'gather_or_cancel',
    'resolve_identity',
    'build_filters',
    'filter_pull_requests',
]
