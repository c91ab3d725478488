"""prs: list open GitHub pull requests involving a user."""

__version__ = "0.1.0"
