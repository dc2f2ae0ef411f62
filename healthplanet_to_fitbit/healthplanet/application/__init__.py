"""Application layer helpers for HealthPlanet integration."""

from .ports import HealthPlanetError, MeasurementSourcePort

__all__ = ["HealthPlanetError", "MeasurementSourcePort"]
