from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

OutcomeStatus = Literal["saved", "skipped", "failed"]


class SyncOutcome(BaseModel):
    """Result of processing one measurement timestamp."""

    timestamp: datetime
    status: OutcomeStatus
    weight_written: bool = False
    fat_written: bool = False
    skip_reason: Optional[str] = Field(
        None, description="Why the timestamp was not written"
    )


class SyncReport(BaseModel):
    """Outcomes collected over one sync run, in processing order."""

    outcomes: List[SyncOutcome] = Field(default_factory=list)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def saved(self) -> int:
        return self._count("saved")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")
