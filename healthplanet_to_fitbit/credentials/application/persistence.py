"""Glue between token rotation events and the credential store."""

from __future__ import annotations

import logging
from typing import Callable

from ...models.auth import TokenPair
from .ports import (
    FITBIT_ACCESS_TOKEN,
    FITBIT_REFRESH_TOKEN,
    CredentialStore,
    PersistenceError,
)

logger = logging.getLogger(__name__)


def persist_rotated_tokens(store: CredentialStore) -> Callable[[TokenPair], None]:
    """Build a rotation listener that writes each new token pair to ``store``.

    The store only rewrites keys it already holds. If either token key is
    absent the rotation is not on disk, and ``PersistenceError`` is raised.
    """

    def _persist(tokens: TokenPair) -> None:
        expected = [FITBIT_ACCESS_TOKEN, FITBIT_REFRESH_TOKEN]
        updated = store.update(
            {
                FITBIT_ACCESS_TOKEN: tokens.access_token,
                FITBIT_REFRESH_TOKEN: tokens.refresh_token,
            }
        )
        missing = [key for key in expected if key not in updated]
        if missing:
            raise PersistenceError(
                f"Credential store has no {', '.join(missing)} entry to update"
            )
        logger.info("Persisted rotated Fitbit tokens (%s)", ", ".join(updated))

    return _persist
