"""Git platform adapters (base and implementations)."""

from prs.adapters.base import GitPlatformAdapter, GitPlatformError
from prs.adapters.github import GitHubAdapter
from prs.adapters.static import StaticAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter", "StaticAdapter"]
