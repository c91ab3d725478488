"""GitHub API adapter."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, TypeVar

import requests
from pydantic import ValidationError

from prs.adapters.base import GitPlatformAdapter, GitPlatformError
from prs.models import Issue, PullRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _issue_from_api(data: Dict[str, Any]) -> Issue:
    return Issue(
        number=data["number"],
        title=data.get("title") or "",
        url=data["url"],
        created_at=_parse_iso(data["created_at"]),
    )


def _issues_from_search(data: Dict[str, Any]) -> List[Issue]:
    return [_issue_from_api(d) for d in data.get("items") or []]


def _pull_request_from_api(data: Dict[str, Any]) -> PullRequest:
    return PullRequest(
        changed_files=data.get("changed_files") or 0,
        additions=data.get("additions") or 0,
        deletions=data.get("deletions") or 0,
        comments=data.get("comments") or 0,
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST API implementation.

    The token is attached to the session headers; nothing is sent until
    the first call.
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: int = 30,
        per_page: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._per_page = per_page
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self._session.request(method, url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {url} failed: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def _get(
        self,
        path: str,
        convert: Callable[[Any], T],
        params: Dict[str, Any] | None = None,
    ) -> T:
        """GET ``path`` and convert the JSON body; any decode or shape
        error becomes GitPlatformError."""
        resp = self._request("GET", path, params=params)
        try:
            return convert(resp.json())
        except (ValueError, ValidationError, KeyError, TypeError, AttributeError) as e:
            raise GitPlatformError(f"Unexpected response from {path}: {e}") from e

    def search_issues(self, query: str, sort: str = "created", order: str = "asc") -> List[Issue]:
        params = {"q": query, "sort": sort, "order": order, "per_page": self._per_page}
        return self._get("/search/issues", _issues_from_search, params=params)

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        return self._get(f"/repos/{owner}/{repo}/pulls/{number}", _pull_request_from_api)
