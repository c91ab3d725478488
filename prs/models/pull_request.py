"""Pull request detail (diff stats and comment count)."""

from pydantic import BaseModel


class PullRequest(BaseModel):
    """Pull request detail.

    All counters default to zero so ``PullRequest()`` stands in for a
    record that could not be fetched.
    """

    changed_files: int = 0
    additions: int = 0
    deletions: int = 0
    comments: int = 0
