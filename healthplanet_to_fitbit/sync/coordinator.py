from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..fitbit.application.ports import FitbitError, FitbitLogPort
from ..healthplanet.application.ports import MeasurementSourcePort
from ..models import Measurement, SyncOutcome, SyncReport

logger = logging.getLogger(__name__)

RECORD_FOUND = "record is found"
NO_VALUES = "no values to write"


class SyncAbortedError(RuntimeError):
    """Raised when a Fitbit failure stops the run before every timestamp is processed."""

    def __init__(self, message: str, report: SyncReport) -> None:
        self.report = report
        super().__init__(message)


class BodyCompositionSyncCoordinator:
    """Copies HealthPlanet readings into Fitbit, skipping days already logged.

    Deduplication works per calendar day: any Fitbit weight record on a date,
    whatever metric it carries, suppresses both writes for that date.
    """

    def __init__(
        self,
        source: MeasurementSourcePort,
        fitbit: FitbitLogPort,
    ) -> None:
        self._source = source
        self._fitbit = fitbit

    def run(self) -> SyncReport:
        measurements = self._source.fetch_measurements()
        logger.info("Fetched %d measurements from HealthPlanet", len(measurements))

        report = SyncReport()
        for timestamp, measurement in measurements.items():
            try:
                existing = self._fitbit.get_weight_log(timestamp.date())
            except FitbitError as exc:
                report.outcomes.append(SyncOutcome(timestamp=timestamp, status="failed"))
                raise SyncAbortedError(
                    f"failed to get weight log from fitbit: time: {timestamp}, err: {exc}",
                    report,
                ) from exc

            if not existing.is_empty():
                logger.info("%s: %s", timestamp, RECORD_FOUND)
                report.outcomes.append(
                    SyncOutcome(
                        timestamp=timestamp, status="skipped", skip_reason=RECORD_FOUND
                    )
                )
                continue

            outcome, error = self._write(timestamp, measurement)
            report.outcomes.append(outcome)
            if error is not None:
                raise SyncAbortedError(
                    f"failed to save measurement: time: {timestamp}, err: {error}",
                    report,
                ) from error

        logger.info(
            "done: %d saved, %d skipped", report.saved, report.skipped
        )
        return report

    def _write(
        self, timestamp: datetime, measurement: Measurement
    ) -> tuple[SyncOutcome, Optional[FitbitError]]:
        if measurement.is_empty():
            logger.info("%s: %s", timestamp, NO_VALUES)
            return (
                SyncOutcome(timestamp=timestamp, status="skipped", skip_reason=NO_VALUES),
                None,
            )

        error: Optional[FitbitError] = None
        weight_written = fat_written = False

        if measurement.weight is not None:
            try:
                self._fitbit.create_weight_log(measurement.weight, timestamp)
                weight_written = True
            except FitbitError as exc:
                logger.error("%s: failed to create weight log: %s", timestamp, exc)
                error = exc

        if measurement.body_fat_percent is not None:
            try:
                self._fitbit.create_body_fat_log(measurement.body_fat_percent, timestamp)
                fat_written = True
            except FitbitError as exc:
                logger.error("%s: failed to create fat log: %s", timestamp, exc)
                error = error or exc

        logger.info(
            "%s: %s, weight: %s, fat: %s",
            timestamp,
            "failed" if error else "saved",
            _format_written(measurement.weight, weight_written),
            _format_written(measurement.body_fat_percent, fat_written),
        )
        outcome = SyncOutcome(
            timestamp=timestamp,
            status="failed" if error else "saved",
            weight_written=weight_written,
            fat_written=fat_written,
        )
        return outcome, error


def _format_written(value: Optional[float], written: bool) -> str:
    if value is None:
        return "nil"
    if not written:
        return f"{value:.2f} (not written)"
    return f"{value:.2f}"


__all__ = ["BodyCompositionSyncCoordinator", "SyncAbortedError"]
