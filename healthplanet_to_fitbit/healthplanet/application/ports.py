"""Ports for reading measurements from HealthPlanet."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol, runtime_checkable

from ...models.body import Measurement


class HealthPlanetError(RuntimeError):
    """Raised when HealthPlanet data cannot be fetched or understood."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


@runtime_checkable
class MeasurementSourcePort(Protocol):
    """Interface describing where body-composition readings come from."""

    def fetch_measurements(self) -> Dict[datetime, Measurement]:
        """Return every reading in the reporting window keyed by timestamp."""


__all__ = ["HealthPlanetError", "MeasurementSourcePort"]
