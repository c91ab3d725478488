"""prs entry point.

Lists open pull requests involving a GitHub user, one line each. Usage:
prs [-c CONFIG] [USERNAME]. The token comes from PRS_GITHUB_ACCESS_TOKEN,
the username from the argument or PRS_USERNAME.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from prs import __version__
from prs.adapters import GitHubAdapter, GitPlatformError
from prs.config import ConfigError, load_config, resolve_credentials
from prs.logging import PrsLogging
from prs.services.listing import list_pull_requests


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = _ArgumentParser(
        prog="prs",
        description="List open GitHub pull requests involving a user",
    )
    parser.add_argument(
        "usernames",
        nargs="*",
        metavar="USERNAME",
        help="GitHub user; overrides PRS_USERNAME",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: $PRS_CONFIG or ./prs.yaml)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point: resolve input, search, print one line per pull
    request."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        credentials = resolve_credentials(config, args.usernames)
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 1

    PrsLogging(config.logging).setup()
    log = logging.getLogger("prs")

    adapter = GitHubAdapter(
        token=credentials.token,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
        per_page=config.github.per_page,
    )

    try:
        list_pull_requests(adapter, credentials.username, sys.stdout)
    except GitPlatformError as e:
        log.error("Could not fetch issues: %s", e)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        log.exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
