"""
Run configuration for the open pull request finder.

Built once from the parsed command line and the environment (which may be
populated from a ``.env`` file), validated, then read-only for the run.
"""

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .api_client import DEFAULT_API_URL, DEFAULT_TIMEOUT
from .errors import ConfigError
from .models import FilterCriteria, normalize_values

OUTPUT_FORMATS = ('text', 'url', 'csv')
REPO_PATTERN = re.compile(r'^[\w.-]+/[\w.-]+$')
VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}


@dataclass(frozen=True)
class Config:
    """Everything one invocation needs to know."""
    repos: Tuple[str, ...]
    token: Optional[str]
    authors: Tuple[str, ...] = ()
    include_labels: Tuple[str, ...] = ()
    exclude_labels: Tuple[str, ...] = ()
    required_approvals: Optional[str] = None  # raw numeric string from the command line
    exclude_already_approved: bool = False
    output_format: str = 'text'
    api_url: str = DEFAULT_API_URL
    timeout: str = str(DEFAULT_TIMEOUT)
    log_level: str = 'WARNING'

    @classmethod
    def from_args(cls, args, environ: Mapping[str, str] = None) -> 'Config':
        """Build the configuration from an argparse namespace.

        Args:
            args: Parsed command line
            environ: Environment to read fallbacks from, defaults to ``os.environ``

        Returns:
            Unvalidated Config
        """
        environ = os.environ if environ is None else environ
        return cls(
            repos=normalize_values(args.repo),
            token=args.token or environ.get('GITHUB_TOKEN') or None,
            authors=normalize_values(args.author),
            include_labels=normalize_values(args.include_label),
            exclude_labels=normalize_values(args.exclude_label),
            required_approvals=args.required_approvals or None,
            exclude_already_approved=bool(args.exclude_already_approved),
            output_format=args.format or 'text',
            api_url=environ.get('GITHUB_API_URL') or DEFAULT_API_URL,
            timeout=environ.get('GITHUB_TIMEOUT') or str(DEFAULT_TIMEOUT),
            log_level=(environ.get('LOG_LEVEL') or 'WARNING').upper(),
        )

    @property
    def approval_threshold(self) -> Optional[int]:
        if self.required_approvals is None:
            return None
        return int(self.required_approvals)

    @property
    def timeout_seconds(self) -> float:
        return float(self.timeout)

    def validate(self) -> None:
        """Check the configuration, reporting every problem at once.

        Raises:
            ConfigError: If anything is missing or malformed
        """
        errors = []

        if not self.repos:
            errors.append("At least one repository (-r) is required")
        for repo in self.repos:
            if not REPO_PATTERN.match(repo):
                errors.append(f"Invalid repository '{repo}', expected owner/name")

        if not self.token:
            errors.append("A GitHub token (-t or GITHUB_TOKEN) is required")

        if self.required_approvals is not None:
            try:
                valid = self.approval_threshold >= 0
            except ValueError:
                valid = False
            if not valid:
                errors.append(f"--required_approvals must be a non-negative integer, got '{self.required_approvals}'")

        if self.output_format not in OUTPUT_FORMATS:
            errors.append(f"Invalid format '{self.output_format}', expected one of: url, csv")

        try:
            if self.timeout_seconds <= 0:
                errors.append("GITHUB_TIMEOUT must be positive")
        except ValueError:
            errors.append(f"Invalid GITHUB_TIMEOUT value '{self.timeout}'")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"Invalid LOG_LEVEL: {self.log_level}")

        if errors:
            raise ConfigError('; '.join(errors))

    def criteria(self, identity: Optional[str] = None) -> FilterCriteria:
        """Filter criteria for this run, with the resolved identity if any."""
        return FilterCriteria(
            authors=self.authors,
            include_labels=self.include_labels,
            exclude_labels=self.exclude_labels,
            required_approvals=self.approval_threshold,
            exclude_already_approved=self.exclude_already_approved,
            identity=identity,
        )
