"""OAuth2 token handling for the Fitbit Web API."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

import httpx

from ...credentials.application.ports import PersistenceError
from ...models.auth import TokenPair
from ..application.ports import FitbitAuthError, FitbitTokenPort, TokenRotatedListener

logger = logging.getLogger(__name__)

EXPIRY_BUFFER = timedelta(seconds=30)


class FitbitTokenManager(FitbitTokenPort):
    """Keep a usable Fitbit access token and announce every rotation."""

    def __init__(
        self,
        http_client: httpx.Client,
        tokens: TokenPair,
        *,
        client_id: str,
        token_url: str,
        on_token_rotated: Optional[TokenRotatedListener] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._http_client = http_client
        self._tokens = tokens
        self._client_id = client_id
        self._token_url = token_url
        self._on_token_rotated = on_token_rotated
        self._clock = clock
        self._refreshed = False
        self._expires_at: Optional[datetime] = None
        self.persistence_error: Optional[PersistenceError] = None

    @property
    def tokens(self) -> TokenPair:
        return self._tokens

    def ensure_valid_token(self) -> str:
        """Return the access token, refreshing on first use or after expiry."""

        if not self._refreshed or self._is_expired():
            self.refresh()
        return self._tokens.access_token

    def refresh(self) -> TokenPair:
        """Exchange the current refresh token for a new token pair.

        The in-memory pair is only replaced after a complete response has
        been received, so a failed refresh leaves the previous pair usable.
        """

        payload = {
            "grant_type": "refresh_token",
            "client_id": self._client_id,
            "refresh_token": self._tokens.refresh_token,
        }
        try:
            response = self._http_client.post(
                self._token_url,
                data=payload,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.TransportError as exc:
            raise FitbitAuthError("refresh failed", str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise FitbitAuthError(
                "refresh failed", f"status {response.status_code}: {response.text}"
            )

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise FitbitAuthError("refresh failed", "response is not JSON") from exc
        if not isinstance(data, dict):
            raise FitbitAuthError("refresh failed", "response is not a JSON object")

        access_token = data.get("access_token")
        refresh_token = data.get("refresh_token")
        expires_in = data.get("expires_in")

        if not isinstance(access_token, str) or not access_token:
            raise FitbitAuthError("refresh failed", "response missing access_token")
        if not isinstance(refresh_token, str) or not refresh_token:
            raise FitbitAuthError("refresh failed", "response missing refresh_token")

        # The old refresh token is already spent; the new pair is stored regardless.
        expires_at: Optional[datetime] = None
        if expires_in is not None:
            try:
                seconds = int(expires_in)
            except (TypeError, ValueError):
                logger.warning(
                    "Ignoring invalid expires_in in Fitbit token response: %r",
                    expires_in,
                )
            else:
                if seconds > 0:
                    expires_at = self._clock() + timedelta(seconds=seconds) - EXPIRY_BUFFER

        self._tokens = TokenPair(access_token=access_token, refresh_token=refresh_token)
        self._refreshed = True
        self._expires_at = expires_at
        logger.info("Refreshed Fitbit access token")

        self._announce(self._tokens)
        return self._tokens

    def _is_expired(self) -> bool:
        return self._expires_at is not None and self._clock() >= self._expires_at

    def _announce(self, tokens: TokenPair) -> None:
        if self._on_token_rotated is None:
            return
        try:
            self._on_token_rotated(tokens)
        except PersistenceError as exc:
            # The new refresh token is live but not on disk; the next run
            # will fail unless an operator restores it.
            self.persistence_error = exc
            logger.error("Failed to persist rotated Fitbit tokens: %s", exc)


def create_fitbit_token_manager(
    *,
    http_client: httpx.Client,
    tokens: TokenPair,
    client_id: str,
    api_url: str,
    on_token_rotated: Optional[TokenRotatedListener] = None,
) -> FitbitTokenManager:
    """Create a token manager pointed at the Fitbit token endpoint."""
    return FitbitTokenManager(
        http_client,
        tokens,
        client_id=client_id,
        token_url=f"{api_url}/oauth2/token",
        on_token_rotated=on_token_rotated,
    )
