"""Ports for durable credential storage."""

from __future__ import annotations

from typing import Dict, List, Mapping, Protocol, runtime_checkable

FITBIT_CLIENT_ID = "FITBIT_CLIENT_ID"
FITBIT_CLIENT_SECRET = "FITBIT_CLIENT_SECRET"
FITBIT_ACCESS_TOKEN = "FITBIT_ACCESS_TOKEN"
FITBIT_REFRESH_TOKEN = "FITBIT_REFRESH_TOKEN"
HEALTHPLANET_ACCESS_TOKEN = "HEALTHPLANET_ACCESS_TOKEN"


class PersistenceError(RuntimeError):
    """Raised when the credential store cannot be written."""


@runtime_checkable
class CredentialStore(Protocol):
    """Key-value store holding client credentials and OAuth tokens."""

    def read_all(self) -> Dict[str, str]:
        """Return every stored key and its value."""

    def update(self, values: Mapping[str, str]) -> List[str]:
        """Rewrite existing keys in one step and return the keys that changed.

        Keys that are not already present are left out.
        """


__all__ = [
    "CredentialStore",
    "PersistenceError",
    "FITBIT_CLIENT_ID",
    "FITBIT_CLIENT_SECRET",
    "FITBIT_ACCESS_TOKEN",
    "FITBIT_REFRESH_TOKEN",
    "HEALTHPLANET_ACCESS_TOKEN",
]
