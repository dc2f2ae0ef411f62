"""Shared test fixtures and doubles."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from healthplanet_to_fitbit.models import Measurement
from healthplanet_to_fitbit.settings import Settings

from tests.fakes import CredentialStoreFake, FitbitLogFake

FITBIT_URL = "https://fitbit.example.com"
HEALTHPLANET_URL = "https://healthplanet.example.com"


class MeasurementSourceFake:
    """Source double returning a fixed mapping of measurements."""

    def __init__(self, measurements: Optional[Dict[datetime, Measurement]] = None) -> None:
        self.measurements: Dict[datetime, Measurement] = dict(measurements or {})
        self.calls = 0

    def add(self, item: Measurement) -> "MeasurementSourceFake":
        self.measurements[item.timestamp] = item
        return self

    def fetch_measurements(self) -> Dict[datetime, Measurement]:
        self.calls += 1
        return dict(self.measurements)


class FrozenClock:
    """Mutable naive clock passed to components that accept a ``clock``."""

    def __init__(self, current: datetime) -> None:
        self._current = current

    def __call__(self) -> datetime:
        return self._current

    def advance(self, **delta: Any) -> None:
        self._current += timedelta(**delta)


@pytest.fixture
def settings() -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        _env_file=None,
        fitbit_client_id="fitbit-client",
        fitbit_client_secret="fitbit-secret",
        fitbit_access_token="old-access",
        fitbit_refresh_token="old-refresh",
        fitbit_api_url=FITBIT_URL,
        healthplanet_access_token="hp-token",
        healthplanet_api_url=HEALTHPLANET_URL,
        healthplanet_lookback_days=30,
    )


@pytest.fixture
def credential_store_fake() -> CredentialStoreFake:
    return CredentialStoreFake(
        {
            "FITBIT_CLIENT_ID": "fitbit-client",
            "FITBIT_ACCESS_TOKEN": "old-access",
            "FITBIT_REFRESH_TOKEN": "old-refresh",
            "HEALTHPLANET_ACCESS_TOKEN": "hp-token",
        }
    )


@pytest.fixture
def fitbit_log_fake() -> FitbitLogFake:
    return FitbitLogFake()


@pytest.fixture
def source_fake() -> MeasurementSourceFake:
    return MeasurementSourceFake()


@pytest.fixture
def freeze_time() -> FrozenClock:
    return FrozenClock(datetime(2024, 3, 1, 12, 0, 0))
