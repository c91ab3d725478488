"""List open pull requests involving a user, one summary line each."""

import logging
from typing import List, TextIO, Tuple

from prs.adapters.base import GitPlatformAdapter, GitPlatformError
from prs.models import Issue, PullRequest

logger = logging.getLogger(__name__)

SEARCH_SORT = "created"
SEARCH_ORDER = "asc"
DATE_FORMAT = "%Y-%m-%d"


class MalformedIssueURLError(ValueError):
    """Raised when an issue URL does not look like
    ``<scheme>://<host>/repos/<owner>/<repo>/...``."""

    pass


def build_query(username: str) -> str:
    """Search query for open pull requests that involve ``username``."""
    return f"type:pr involves:{username} state:open"


def retrieve_issues(adapter: GitPlatformAdapter, username: str) -> List[Issue]:
    """Return issues for all open pull requests involving ``username``,
    oldest first.

    Raises GitPlatformError when the search fails.
    """
    return adapter.search_issues(build_query(username), sort=SEARCH_SORT, order=SEARCH_ORDER)


def extract_owner_and_repo(url: str) -> Tuple[str, str]:
    """Return (owner, repo) from an issue API URL.

    ``https://api.github.com/repos/acme/widgets/issues/7`` gives
    ``("acme", "widgets")``.
    """
    parts = url.split("/")
    if len(parts) < 6:
        raise MalformedIssueURLError(f"Cannot extract owner and repository from issue URL: {url!r}")
    return parts[4], parts[5]


def fetch_pull_request(adapter: GitPlatformAdapter, owner: str, repo: str, issue: Issue) -> PullRequest:
    """Fetch the pull request behind ``issue``.

    A failed fetch is logged and yields an empty PullRequest so the caller
    can still print the item.
    """
    try:
        return adapter.get_pull_request(owner, repo, issue.number)
    except GitPlatformError as e:
        logger.warning("Could not fetch pull request for issue %s: %s", issue.url, e)
        return PullRequest()


def format_line(owner: str, repo: str, issue: Issue, pr: PullRequest) -> str:
    """Summary line for one pull request (title is not escaped)."""
    return " | ".join(
        [
            f"{owner}/{repo}",
            issue.title,
            f"* {pr.changed_files} + {pr.additions} - {pr.deletions}",
            f"C {pr.comments}",
            issue.created_at.strftime(DATE_FORMAT),
            issue.url,
        ]
    )


def list_pull_requests(adapter: GitPlatformAdapter, username: str, out: TextIO) -> int:
    """Write one line per open pull request involving ``username`` to
    ``out`` in search order.

    Returns the number of lines written. Search errors propagate; per-item
    fetch errors do not.
    """
    issues = retrieve_issues(adapter, username)
    logger.info("Found %d open pull requests involving %s", len(issues), username)
    for issue in issues:
        owner, repo = extract_owner_and_repo(issue.url)
        pr = fetch_pull_request(adapter, owner, repo, issue)
        print(format_line(owner, repo, issue, pr), file=out)
    return len(issues)
