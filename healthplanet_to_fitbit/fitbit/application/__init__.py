"""Application layer for Fitbit integration."""

from .ports import (
    FitbitAuthError,
    FitbitDecodeError,
    FitbitError,
    FitbitHTTPError,
    FitbitLogPort,
    FitbitTokenPort,
    TokenRotatedListener,
)

__all__ = [
    "FitbitAuthError",
    "FitbitDecodeError",
    "FitbitError",
    "FitbitHTTPError",
    "FitbitLogPort",
    "FitbitTokenPort",
    "TokenRotatedListener",
]
