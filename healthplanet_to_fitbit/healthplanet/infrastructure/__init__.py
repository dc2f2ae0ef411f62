"""Infrastructure helpers for HealthPlanet integration."""

from .client import HealthPlanetInnerScanAdapter, create_healthplanet_adapter

__all__ = ["HealthPlanetInnerScanAdapter", "create_healthplanet_adapter"]
