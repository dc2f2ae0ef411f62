"""Infrastructure helpers for Fitbit integration."""

from .client import FitbitLogClient, create_fitbit_log_client
from .token_manager import FitbitTokenManager, create_fitbit_token_manager

__all__ = [
    "FitbitLogClient",
    "FitbitTokenManager",
    "create_fitbit_log_client",
    "create_fitbit_token_manager",
]
