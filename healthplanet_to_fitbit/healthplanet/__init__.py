"""HealthPlanet integration modules."""

from .application import HealthPlanetError, MeasurementSourcePort
from .infrastructure import HealthPlanetInnerScanAdapter, create_healthplanet_adapter

__all__ = [
    "HealthPlanetError",
    "MeasurementSourcePort",
    "HealthPlanetInnerScanAdapter",
    "create_healthplanet_adapter",
]
