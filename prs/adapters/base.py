"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from prs.models import Issue, PullRequest


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Remote operations needed to list pull requests for a user."""

    @abstractmethod
    def search_issues(self, query: str, sort: str = "created", order: str = "asc") -> List[Issue]:
        """Search issues and pull requests; results keep the API order."""
        ...

    @abstractmethod
    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        """Fetch pull request detail by owner, repository and number."""
        ...
