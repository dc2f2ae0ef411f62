"""Ports for the Fitbit application layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional, Protocol, runtime_checkable

from ...models.auth import TokenPair
from ...models.body import WeightLog

TokenRotatedListener = Callable[[TokenPair], None]


class FitbitError(RuntimeError):
    """Base class for failures talking to Fitbit."""


class FitbitAuthError(FitbitError):
    """Raised when the refresh-token grant fails."""

    def __init__(self, reason: str, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)


class FitbitHTTPError(FitbitError):
    """Raised when Fitbit answers outside the accepted status range."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class FitbitDecodeError(FitbitError):
    """Raised when a Fitbit response body cannot be decoded."""


@runtime_checkable
class FitbitTokenPort(Protocol):
    """Port exposing access tokens that are valid for immediate use."""

    def ensure_valid_token(self) -> str:
        """Return an access token, refreshing it first when required."""

    def refresh(self) -> TokenPair:
        """Run the refresh-token grant and return the new pair."""


@runtime_checkable
class FitbitLogPort(Protocol):
    """Port that exposes the Fitbit body log operations used by the sync."""

    def get_weight_log(self, day: date) -> WeightLog:
        """Return the weight records stored for ``day``."""

    def create_weight_log(self, weight: float, timestamp: datetime) -> None:
        """Store a weight record at ``timestamp``."""

    def create_body_fat_log(self, fat: float, timestamp: datetime) -> None:
        """Store a body fat record at ``timestamp``."""


__all__ = [
    "FitbitError",
    "FitbitAuthError",
    "FitbitHTTPError",
    "FitbitDecodeError",
    "FitbitTokenPort",
    "FitbitLogPort",
    "TokenRotatedListener",
]
