from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Measurement(BaseModel):
    """A single body-composition reading taken by the scale."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    weight: Optional[float] = Field(None, description="Body weight in kilograms")
    body_fat_percent: Optional[float] = Field(None, description="Body fat percentage")

    def is_empty(self) -> bool:
        return self.weight is None and self.body_fat_percent is None


class WeightLogEntry(BaseModel):
    """A weight record already stored in Fitbit."""

    model_config = ConfigDict(populate_by_name=True)

    bmi: Optional[float] = None
    date: str
    fat: Optional[float] = None
    log_id: Optional[int] = Field(None, alias="logId")
    source: Optional[str] = None
    time: Optional[str] = None
    weight: Optional[float] = None


class WeightLog(BaseModel):
    """Fitbit weight log for a single calendar day."""

    weight: List[WeightLogEntry] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.weight

    class Config:
        json_schema_extra = {
            "example": {
                "weight": [
                    {
                        "bmi": 22.65,
                        "date": "2024-03-01",
                        "fat": 18.2,
                        "logId": 1330991999000,
                        "source": "API",
                        "time": "07:00:00",
                        "weight": 65.5,
                    }
                ]
            }
        }
