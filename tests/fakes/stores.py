"""In-memory credential store double."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from healthplanet_to_fitbit.credentials.application.ports import (
    CredentialStore,
    PersistenceError,
)


class CredentialStoreFake(CredentialStore):
    """Dict-backed store that keeps the update-only semantics of the dotenv store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.store: Dict[str, str] = dict(initial or {})
        self.updates: List[Dict[str, str]] = []
        self.fail_with: Optional[PersistenceError] = None

    def read_all(self) -> Dict[str, str]:
        return dict(self.store)

    def update(self, values: Mapping[str, str]) -> List[str]:
        if self.fail_with is not None:
            raise self.fail_with
        self.updates.append(dict(values))
        updated = [key for key in values if key in self.store]
        for key in updated:
            self.store[key] = values[key]
        return updated
