"""Sync orchestration between HealthPlanet and Fitbit."""

from .coordinator import BodyCompositionSyncCoordinator, SyncAbortedError

__all__ = ["BodyCompositionSyncCoordinator", "SyncAbortedError"]
