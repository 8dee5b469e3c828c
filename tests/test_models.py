"""
Unit tests for the data models
"""

from open_pull_requests.models import FilterCriteria, Label, PullRequest, Review, normalize_values


class TestPullRequestFromApi:
    """Test cases for building PullRequest objects from API items."""

    def test_from_api(self):
        """Test that the listing fields are mapped."""
        item = {
            'number': 42,
            'user': {'login': 'alice'},
            'title': 'Fix login',
            'html_url': 'https://github.com/acme/app/pull/42',
            'labels': [{'name': 'bug', 'color': 'ff0000'}, {'name': 'urgent'}],
            'head': {'repo': {'full_name': 'alice/app'}},
            'base': {'repo': {'full_name': 'acme/app'}},
        }
        pr = PullRequest.from_api(item, 'acme/app')

        assert pr.number == 42
        assert pr.author == 'alice'
        assert pr.title == 'Fix login'
        assert pr.url == 'https://github.com/acme/app/pull/42'
        assert pr.repository == 'alice/app'
        assert pr.base_repository == 'acme/app'
        assert pr.labels == [Label('bug'), Label('urgent')]
        assert pr.reviews == []

    def test_deleted_fork_falls_back_to_base(self):
        """Test that a null head repo uses the base repo name."""
        item = {
            'number': 1,
            'user': {'login': 'bob'},
            'title': 'Orphan',
            'html_url': 'https://github.com/acme/app/pull/1',
            'labels': [],
            'head': {'repo': None},
            'base': {'repo': {'full_name': 'acme/app'}},
        }
        assert PullRequest.from_api(item, 'acme/app').repository == 'acme/app'

    def test_missing_repo_info_uses_listed_repo(self):
        """Test that a PR with no head/base info uses the repo it was listed from."""
        item = {
            'number': 1,
            'user': {'login': 'bob'},
            'title': 'Bare',
            'html_url': 'https://github.com/acme/app/pull/1',
        }
        pr = PullRequest.from_api(item, 'acme/app')
        assert pr.repository == 'acme/app'
        assert pr.labels == []


class TestReview:
    """Test cases for Review objects."""

    def test_from_api(self):
        review = Review.from_api({'user': {'login': 'carol'}, 'state': 'APPROVED', 'id': 7})
        assert review == Review('carol', 'APPROVED')
        assert review.is_approval

    def test_deleted_user(self):
        """Test that a review by a deleted account has no author."""
        review = Review.from_api({'user': None, 'state': 'COMMENTED'})
        assert review.author is None
        assert not review.is_approval

    def test_approval_count(self, make_pr):
        pr = make_pr(1, reviews=[('a', 'APPROVED'), ('b', 'COMMENTED'), ('a', 'APPROVED')])
        assert pr.approval_count == 2


class TestFilterCriteria:
    """Test cases for filter option normalization."""

    def test_defaults_are_unset(self):
        criteria = FilterCriteria()
        assert criteria.authors == ()
        assert criteria.include_labels == ()
        assert criteria.exclude_labels == ()
        assert criteria.required_approvals is None
        assert criteria.exclude_already_approved is False
        assert criteria.identity is None

    def test_single_values_become_tuples(self):
        """Test that a bare string is a one-element collection."""
        criteria = FilterCriteria(authors='alice', include_labels=['bug'], exclude_labels=None)
        assert criteria.authors == ('alice',)
        assert criteria.include_labels == ('bug',)
        assert criteria.exclude_labels == ()

    def test_normalize_values(self):
        assert normalize_values(None) == ()
        assert normalize_values('') == ()
        assert normalize_values([]) == ()
        assert normalize_values('x') == ('x',)
        assert normalize_values(['x', 'y']) == ('x', 'y')
