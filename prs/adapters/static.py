"""Adapter serving fixed responses, for tests and offline runs."""

from typing import Dict, List, Tuple

from prs.adapters.base import GitPlatformAdapter, GitPlatformError
from prs.models import Issue, PullRequest


class StaticAdapter(GitPlatformAdapter):
    """Return preset issues and pull requests.

    ``pull_requests`` is keyed by ``(owner, repo, number)``; a missing key
    raises GitPlatformError like a 404 would. Every call is recorded in
    ``queries`` and ``fetched``.
    """

    def __init__(
        self,
        issues: List[Issue] | None = None,
        pull_requests: Dict[Tuple[str, str, int], PullRequest] | None = None,
        search_error: GitPlatformError | None = None,
    ) -> None:
        self._issues = list(issues or [])
        self._pull_requests = dict(pull_requests or {})
        self._search_error = search_error
        self.queries: List[Tuple[str, str, str]] = []
        self.fetched: List[Tuple[str, str, int]] = []

    def search_issues(self, query: str, sort: str = "created", order: str = "asc") -> List[Issue]:
        self.queries.append((query, sort, order))
        if self._search_error is not None:
            raise self._search_error
        return list(self._issues)

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        key = (owner, repo, number)
        self.fetched.append(key)
        if key not in self._pull_requests:
            raise GitPlatformError(f"404: Not Found ({owner}/{repo}#{number})")
        return self._pull_requests[key]
