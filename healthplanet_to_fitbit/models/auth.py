from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TokenPair(BaseModel):
    """OAuth2 access/refresh token pair issued by Fitbit."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str
