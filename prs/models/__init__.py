"""Data models for credentials, issues and pull requests (Pydantic)."""

from prs.models.credentials import Credentials
from prs.models.issue import Issue
from prs.models.pull_request import PullRequest

__all__ = ["Credentials", "Issue", "PullRequest"]
