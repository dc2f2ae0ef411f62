"""Dependency wiring for the sync use case."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

import httpx

from .credentials.application import CredentialStore, persist_rotated_tokens
from .fitbit.infrastructure import (
    FitbitTokenManager,
    create_fitbit_log_client,
    create_fitbit_token_manager,
)
from .healthplanet.infrastructure import create_healthplanet_adapter
from .models import TokenPair
from .settings import Settings
from .sync import BodyCompositionSyncCoordinator


@dataclass
class SyncRuntime:
    coordinator: BodyCompositionSyncCoordinator
    token_manager: FitbitTokenManager


@contextmanager
def provide_sync_runtime(
    settings: Settings,
    store: CredentialStore,
    *,
    http_client: Optional[httpx.Client] = None,
) -> Iterator[SyncRuntime]:
    """Yield a coordinator wired to HealthPlanet, Fitbit and ``store``.

    Requests run without a timeout, so a stalled connection blocks the run.
    """

    owns_client = http_client is None
    client = http_client or httpx.Client(timeout=None)
    try:
        token_manager = create_fitbit_token_manager(
            http_client=client,
            tokens=TokenPair(
                access_token=settings.fitbit_access_token,
                refresh_token=settings.fitbit_refresh_token,
            ),
            client_id=settings.fitbit_client_id,
            api_url=settings.fitbit_api_url,
            on_token_rotated=persist_rotated_tokens(store),
        )
        fitbit = create_fitbit_log_client(
            http_client=client,
            tokens=token_manager,
            api_url=settings.fitbit_api_url,
        )
        source = create_healthplanet_adapter(
            http_client=client,
            access_token=settings.healthplanet_access_token,
            api_url=settings.healthplanet_api_url,
            lookback_days=settings.healthplanet_lookback_days,
        )
        yield SyncRuntime(
            coordinator=BodyCompositionSyncCoordinator(source, fitbit),
            token_manager=token_manager,
        )
    finally:
        if owns_client:
            client.close()


__all__ = ["SyncRuntime", "provide_sync_runtime"]
