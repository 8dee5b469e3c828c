"""Output formatting for filtered pull requests."""

import csv
import sys
from typing import List, TextIO

from .errors import ConfigError
from .models import PullRequest


class OutputFormatter:
    """Formats and prints pull requests as text, URLs or CSV."""

    def __init__(self, output_format: str = 'text', stream: TextIO = None):
        """Initialize the output formatter.

        Args:
            output_format: 'text' (default), 'url' or 'csv'
            stream: Where to write, defaults to standard output
        """
        printers = {
            'text': self._print_text,
            'url': self._print_urls,
            'csv': self._print_csv,
        }
        if output_format not in printers:
            raise ConfigError(f"Unknown output format '{output_format}'")
        self.output_format = output_format
        self.stream = stream or sys.stdout
        self._printer = printers[output_format]

    def print_pull_requests(self, pull_requests: List[PullRequest]):
        self._printer(pull_requests)

    def _print_text(self, pull_requests: List[PullRequest]):
        for pr in pull_requests:
            print(f"{pr.repository} {pr.number} {pr.author} {pr.title}", file=self.stream)

    def _print_urls(self, pull_requests: List[PullRequest]):
        for pr in pull_requests:
            print(pr.url, file=self.stream)

    def _print_csv(self, pull_requests: List[PullRequest]):
        """Write one row per PR: repo, number, author, title, labels.

        Label names share one field, joined with commas.
        """
        if not pull_requests:
            return
        writer = csv.writer(self.stream, lineterminator='\n')
        writer.writerows(
            [pr.repository, pr.number, pr.author, pr.title, ','.join(pr.label_names)]
            for pr in pull_requests
        )
