from .auth import TokenPair
from .body import Measurement, WeightLog, WeightLogEntry
from .sync import OutcomeStatus, SyncOutcome, SyncReport

__all__ = [
    "Measurement",
    "WeightLog",
    "WeightLogEntry",
    "TokenPair",
    "OutcomeStatus",
    "SyncOutcome",
    "SyncReport",
]
