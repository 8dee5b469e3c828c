"""Command line entry point for listing open pull requests."""

import argparse
import asyncio
import logging
import sys
from typing import List, Mapping, Sequence, TextIO

import httpx
from dotenv import load_dotenv

from .analyzer import find_open_pull_requests
from .api_client import GitHubAPIClient
from .config import Config
from .errors import ConfigError, OpenPullRequestsError
from .models import PullRequest
from .output import OutputFormatter

EPILOG = """\
Notes:
  At least 1 repo (-r) and exactly 1 token (-t) are required.
  The token may also be given through the GITHUB_TOKEN environment variable
  or a .env file.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='open-pull-requests',
        description='List open GitHub pull requests that need attention.',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('-a', '--author', action='append',
                        help='Filter results by author, supports multiple uses')
    parser.add_argument('-f', '--format', choices=['url', 'csv'],
                        help='Output results in different format. '
                             '"url" - only output URLs for each result, '
                             '"csv" - output CSV-compatible output for parsing')
    parser.add_argument('--exclude_already_approved', action='store_true',
                        help='Exclude results already approved by authenticated user')
    parser.add_argument('-l', '--include_label', action='append',
                        help='Only include results that have a given label, supports multiple uses')
    parser.add_argument('-L', '--exclude_label', action='append',
                        help='Exclude results that have a given label, supports multiple uses')
    parser.add_argument('--required_approvals', metavar='N',
                        help='Exclude results that already have N or more approvals')
    parser.add_argument('-r', '--repo', action='append',
                        help='Include GitHub repository in query, supports multiple uses. '
                             'Format: ":org/:repo"')
    parser.add_argument('-t', '--token',
                        help='GitHub API token to use for authentication')
    return parser


def setup_logging(level: str = 'WARNING'):
    """Configure logging on stderr so standard output only carries results."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p',
        stream=sys.stderr,
    )


async def run(config: Config, client: GitHubAPIClient, out: TextIO = None) -> List[PullRequest]:
    """Find, filter and print open pull requests.

    Nothing is printed unless every retrieval succeeded.

    Args:
        config: Validated run configuration
        client: GitHub API client to query through
        out: Output stream, defaults to standard output

    Returns:
        The pull requests that were printed
    """
    formatter = OutputFormatter(config.output_format, out)
    pull_requests = await find_open_pull_requests(client, config)
    formatter.print_pull_requests(pull_requests)
    return pull_requests


async def _run_with_client(config: Config, out: TextIO, transport: httpx.AsyncBaseTransport = None):
    async with GitHubAPIClient(config.token, config.api_url, config.timeout_seconds,
                               transport=transport) as client:
        return await run(config, client, out)


def main(argv: Sequence[str] = None, environ: Mapping[str, str] = None,
         out: TextIO = None, transport: httpx.AsyncBaseTransport = None) -> int:
    """Main entry point for the script.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``
        environ: Environment, defaults to ``os.environ`` after loading ``.env``
        out: Output stream, defaults to standard output
        transport: HTTP transport override

    Returns:
        Process exit status
    """
    if environ is None:
        load_dotenv()

    args = build_parser().parse_args(argv)
    config = Config.from_args(args, environ)

    try:
        config.validate()
    except ConfigError as e:
        setup_logging()
        logging.error(str(e))
        return 2

    setup_logging(config.log_level)

    try:
        asyncio.run(_run_with_client(config, out, transport))
    except OpenPullRequestsError as e:
        logging.error(str(e))
        return 1

    return 0
