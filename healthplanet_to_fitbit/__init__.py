"""Copy HealthPlanet body-composition readings into Fitbit."""

__version__ = "1.0.0"
