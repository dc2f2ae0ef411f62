"""Fitbit integration modules."""

from .application import (
    FitbitAuthError,
    FitbitDecodeError,
    FitbitError,
    FitbitHTTPError,
    FitbitLogPort,
    FitbitTokenPort,
)
from .infrastructure import (
    FitbitLogClient,
    FitbitTokenManager,
    create_fitbit_log_client,
    create_fitbit_token_manager,
)

__all__ = [
    "FitbitAuthError",
    "FitbitDecodeError",
    "FitbitError",
    "FitbitHTTPError",
    "FitbitLogPort",
    "FitbitTokenPort",
    "FitbitLogClient",
    "FitbitTokenManager",
    "create_fitbit_log_client",
    "create_fitbit_token_manager",
]
