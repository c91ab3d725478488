"""Search hit for an open pull request."""

from datetime import datetime

from pydantic import BaseModel


class Issue(BaseModel):
    """Issue record returned by the search endpoint.

    ``url`` is the API URL
    (``https://api.github.com/repos/<owner>/<repo>/issues/<number>``).
    """

    number: int
    title: str
    url: str
    created_at: datetime
