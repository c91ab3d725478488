"""Resolved access token and target username."""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Token used to call the API and the user whose pull requests are
    listed."""

    token: str = Field(min_length=1)
    username: str = Field(min_length=1)
