"""Data models for open pull requests and their reviews."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

APPROVED = 'APPROVED'


def normalize_values(values: Union[None, str, Iterable[str]]) -> Tuple[str, ...]:
    """Normalize a filter option to a tuple; a bare string becomes a one-element tuple."""
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class Label:
    """A label attached to a pull request."""
    name: str

    @classmethod
    def from_api(cls, data: Dict) -> 'Label':
        return cls(name=data['name'])


@dataclass(frozen=True)
class Review:
    """A single review left on a pull request."""
    author: Optional[str]  # None when the reviewer account was deleted
    state: str

    @classmethod
    def from_api(cls, data: Dict) -> 'Review':
        user = data.get('user') or {}
        return cls(author=user.get('login'), state=data['state'])

    @property
    def is_approval(self) -> bool:
        return self.state == APPROVED


@dataclass
class PullRequest:
    """An open pull request, enriched with its reviews once fetched."""
    number: int
    author: str
    title: str
    repository: str  # source repository full name, used for display
    base_repository: str  # repository the PR was listed from, used to address reviews
    url: str
    labels: List[Label] = field(default_factory=list)
    reviews: List[Review] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict, base_repository: str) -> 'PullRequest':
        """Build a pull request from one item of the pull request listing.

        Args:
            data: JSON object returned by the pulls endpoint
            base_repository: The ``owner/name`` the item was listed from

        Returns:
            PullRequest with no reviews attached yet
        """
        head_repo = (data.get('head') or {}).get('repo')
        base_repo = (data.get('base') or {}).get('repo')
        # Head repo is null when the fork behind the PR has been deleted
        source = head_repo or base_repo or {}

        return cls(
            number=data['number'],
            author=data['user']['login'],
            title=data['title'],
            repository=source.get('full_name', base_repository),
            base_repository=base_repository,
            url=data['html_url'],
            labels=[Label.from_api(label) for label in data.get('labels') or []],
        )

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]

    @property
    def approval_count(self) -> int:
        return sum(1 for review in self.reviews if review.is_approval)


@dataclass(frozen=True)
class FilterCriteria:
    """Active filter options for one run.

    Multi-value options are stored as tuples; an empty tuple means the option
    is not set. ``required_approvals`` of None means no threshold.
    """
    authors: Tuple[str, ...] = ()
    include_labels: Tuple[str, ...] = ()
    exclude_labels: Tuple[str, ...] = ()
    required_approvals: Optional[int] = None
    exclude_already_approved: bool = False
    identity: Optional[str] = None

    def __post_init__(self):
        for name in ('authors', 'include_labels', 'exclude_labels'):
            object.__setattr__(self, name, normalize_values(getattr(self, name)))
