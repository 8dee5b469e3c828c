"""Filter pipeline applied to enriched pull requests.

Each stage is a predicate built from the ``FilterCriteria``. A stage whose
option is not set always passes, so the pipeline never rejects everything
because an option was left out. A pull request is kept when every stage
passes, evaluated in this order:

1. author
2. include label
3. exclude label
4. required approvals (keeps PRs with FEWER approvals than the threshold)
5. already approved by me
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from ..errors import ConfigError
from ..models import FilterCriteria, PullRequest

Predicate = Callable[[PullRequest], bool]


def _always(pull_request: PullRequest) -> bool:
    return True


def by_author(authors: Sequence[str]) -> Predicate:
    if not authors:
        return _always
    allowed = set(authors)

    def predicate(pull_request: PullRequest) -> bool:
        return pull_request.author in allowed
    return predicate


def with_any_label(labels: Sequence[str]) -> Predicate:
    if not labels:
        return _always
    wanted = set(labels)

    def predicate(pull_request: PullRequest) -> bool:
        return any(name in wanted for name in pull_request.label_names)
    return predicate


def without_labels(labels: Sequence[str]) -> Predicate:
    if not labels:
        return _always
    has_label = with_any_label(labels)

    def predicate(pull_request: PullRequest) -> bool:
        return not has_label(pull_request)
    return predicate


def needs_approvals(required_approvals: Optional[int]) -> Predicate:
    """Keep pull requests with strictly fewer APPROVED reviews than required.

    Pull requests that already reached the threshold are dropped; a PR with
    exactly ``required_approvals`` approvals does not pass.
    """
    if required_approvals is None:
        return _always

    def predicate(pull_request: PullRequest) -> bool:
        return pull_request.approval_count < required_approvals
    return predicate


def not_approved_by(enabled: bool, identity: Optional[str]) -> Predicate:
    if not enabled:
        return _always
    if not identity:
        raise ConfigError("Excluding already approved PRs requires the authenticated user")

    def predicate(pull_request: PullRequest) -> bool:
        return not any(review.author == identity and review.is_approval
                       for review in pull_request.reviews)
    return predicate


def build_filters(criteria: FilterCriteria) -> List[Predicate]:
    """Build the ordered list of filter stages for the given criteria."""
    return [
        by_author(criteria.authors),
        with_any_label(criteria.include_labels),
        without_labels(criteria.exclude_labels),
        needs_approvals(criteria.required_approvals),
        not_approved_by(criteria.exclude_already_approved, criteria.identity),
    ]


def passes_all(predicates: Sequence[Predicate], pull_request: PullRequest) -> bool:
    return all(predicate(pull_request) for predicate in predicates)


def filter_pull_requests(pull_requests: Iterable[PullRequest], criteria: FilterCriteria) -> List[PullRequest]:
    """Apply every filter stage to the pull requests.

    Args:
        pull_requests: Enriched pull requests
        criteria: Active filter options

    Returns:
        New list of the pull requests passing all stages, in input order
    """
    predicates = build_filters(criteria)
    pull_requests = list(pull_requests)
    kept = [pr for pr in pull_requests if passes_all(predicates, pr)]
    logging.info(f"{len(kept)} of {len(pull_requests)} PRs left after filtering")
    return kept
