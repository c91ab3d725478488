"""Tests for the listing service (search, URL parsing, fetch, format)."""

import io
import logging
from datetime import UTC, datetime, timedelta, timezone

import pytest

from prs.adapters import GitPlatformError, StaticAdapter
from prs.models import Issue, PullRequest
from prs.services.listing import (
    MalformedIssueURLError,
    build_query,
    extract_owner_and_repo,
    fetch_pull_request,
    format_line,
    list_pull_requests,
    retrieve_issues,
)

URL = "https://api.example.com/repos/acme/widgets/issues/7"


def _issue(number: int, title: str, url: str, created: str = "2021-05-01T00:00:00Z") -> Issue:
    return Issue(number=number, title=title, url=url, created_at=created)


def test_build_query() -> None:
    assert build_query("octocat") == "type:pr involves:octocat state:open"


def test_retrieve_issues_searches_oldest_first() -> None:
    """Search is sorted by creation date ascending."""
    adapter = StaticAdapter(issues=[_issue(7, "Fix bug", URL)])
    issues = retrieve_issues(adapter, "octocat")
    assert [i.number for i in issues] == [7]
    assert adapter.queries == [("type:pr involves:octocat state:open", "created", "asc")]


def test_extract_owner_and_repo() -> None:
    assert extract_owner_and_repo(URL) == ("acme", "widgets")
    assert extract_owner_and_repo("https://api.github.com/repos/octo-org/hello.world/issues/1") == (
        "octo-org",
        "hello.world",
    )


def test_extract_owner_and_repo_malformed_url_raises() -> None:
    """Too few path segments raise a descriptive ValueError."""
    with pytest.raises(MalformedIssueURLError, match="api.example.com/acme"):
        extract_owner_and_repo("https://api.example.com/acme")
    with pytest.raises(ValueError):
        extract_owner_and_repo("")


def test_format_line_exact() -> None:
    issue = _issue(7, "Fix bug", URL)
    pr = PullRequest(changed_files=3, additions=10, deletions=2, comments=1)
    assert format_line("acme", "widgets", issue, pr) == (
        "acme/widgets | Fix bug | * 3 + 10 - 2 | C 1 | 2021-05-01 | "
        "https://api.example.com/repos/acme/widgets/issues/7"
    )


def test_format_line_title_passed_verbatim() -> None:
    """Delimiter-like characters in the title are not escaped."""
    issue = _issue(7, "a | b * c", URL)
    line = format_line("acme", "widgets", issue, PullRequest())
    assert line.startswith("acme/widgets | a | b * c | * 0 + 0 - 0 | C 0 | ")


def test_format_line_empty_title() -> None:
    line = format_line("acme", "widgets", _issue(7, "", URL), PullRequest())
    assert line.startswith("acme/widgets |  | * 0")


def test_format_line_keeps_timestamp_timezone() -> None:
    """The date is taken in the timestamp's own timezone."""
    created = datetime(2021, 5, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    issue = Issue(number=7, title="t", url=URL, created_at=created)
    assert "| 2021-05-01 |" in format_line("acme", "widgets", issue, PullRequest())


def test_fetch_pull_request_success() -> None:
    pr = PullRequest(changed_files=3, additions=1)
    adapter = StaticAdapter(pull_requests={("acme", "widgets", 7): pr})
    assert fetch_pull_request(adapter, "acme", "widgets", _issue(7, "Fix bug", URL)) is pr


def test_fetch_pull_request_failure_returns_zero_record(caplog: pytest.LogCaptureFixture) -> None:
    """A failed fetch logs a warning and yields an empty record."""
    adapter = StaticAdapter()
    with caplog.at_level(logging.WARNING, logger="prs.services.listing"):
        pr = fetch_pull_request(adapter, "acme", "widgets", _issue(7, "Fix bug", URL))
    assert pr == PullRequest()
    assert len(caplog.records) == 1
    assert URL in caplog.records[0].getMessage()
    assert "404" in caplog.records[0].getMessage()


def test_list_pull_requests_one_line_per_issue_with_failure(caplog: pytest.LogCaptureFixture) -> None:
    """One failing fetch among several still prints every issue and warns
    once."""
    url_a = "https://api.github.com/repos/acme/widgets/issues/1"
    url_b = "https://api.github.com/repos/acme/gadgets/issues/2"
    url_c = "https://api.github.com/repos/other/tools/issues/3"
    adapter = StaticAdapter(
        issues=[
            _issue(1, "First", url_a, "2021-01-01T00:00:00Z"),
            _issue(2, "Second", url_b, "2021-02-01T00:00:00Z"),
            _issue(3, "Third", url_c, "2021-03-01T00:00:00Z"),
        ],
        pull_requests={
            ("acme", "widgets", 1): PullRequest(changed_files=1, additions=2, deletions=3, comments=4),
            ("other", "tools", 3): PullRequest(changed_files=5, additions=6, deletions=7, comments=8),
        },
    )
    out = io.StringIO()

    with caplog.at_level(logging.WARNING, logger="prs.services.listing"):
        count = list_pull_requests(adapter, "octocat", out)

    assert count == 3
    assert out.getvalue().splitlines() == [
        f"acme/widgets | First | * 1 + 2 - 3 | C 4 | 2021-01-01 | {url_a}",
        f"acme/gadgets | Second | * 0 + 0 - 0 | C 0 | 2021-02-01 | {url_b}",
        f"other/tools | Third | * 5 + 6 - 7 | C 8 | 2021-03-01 | {url_c}",
    ]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert url_b in warnings[0].getMessage()
    assert adapter.fetched == [("acme", "widgets", 1), ("acme", "gadgets", 2), ("other", "tools", 3)]


def test_list_pull_requests_keeps_search_order() -> None:
    """Lines follow the search result order, never re-sorted."""
    urls = [f"https://api.github.com/repos/acme/widgets/issues/{n}" for n in (9, 2, 5)]
    adapter = StaticAdapter(
        issues=[
            _issue(9, "Nine", urls[0], "2021-03-01T00:00:00Z"),
            _issue(2, "Two", urls[1], "2020-01-01T00:00:00Z"),
            _issue(5, "Five", urls[2], "2022-07-01T00:00:00Z"),
        ],
    )
    out = io.StringIO()
    list_pull_requests(adapter, "octocat", out)
    titles = [line.split(" | ")[1] for line in out.getvalue().splitlines()]
    assert titles == ["Nine", "Two", "Five"]


def test_list_pull_requests_search_error_propagates() -> None:
    """Search failure propagates and nothing is written."""
    adapter = StaticAdapter(search_error=GitPlatformError("401: Bad credentials"))
    out = io.StringIO()
    with pytest.raises(GitPlatformError):
        list_pull_requests(adapter, "octocat", out)
    assert out.getvalue() == ""
    assert adapter.fetched == []


def test_list_pull_requests_empty() -> None:
    out = io.StringIO()
    assert list_pull_requests(StaticAdapter(), "octocat", out) == 0
    assert out.getvalue() == ""


def test_issue_created_at_parsed_as_utc() -> None:
    assert _issue(7, "t", URL).created_at == datetime(2021, 5, 1, tzinfo=UTC)


def test_models_carry_only_listed_fields() -> None:
    """Issue and PullRequest hold exactly what the summary line reads."""
    assert set(Issue.model_fields) == {"number", "title", "url", "created_at"}
    assert set(PullRequest.model_fields) == {"changed_files", "additions", "deletions", "comments"}
