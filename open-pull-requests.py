#!/usr/bin/env python3
"""
Open Pull Requests
Lists open PRs across GitHub repositories, filtered by author, labels and approvals.
"""

import sys

from open_pull_requests.cli import main


if __name__ == "__main__":
    sys.exit(main())
