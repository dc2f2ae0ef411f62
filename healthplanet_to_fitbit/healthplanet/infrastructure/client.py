"""HTTP-backed implementation of the HealthPlanet measurement source."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List

import httpx

from ...models.body import Measurement
from ..application.ports import HealthPlanetError, MeasurementSourcePort

WEIGHT_TAG = "6021"
BODY_FAT_TAG = "6022"


class HealthPlanetInnerScanAdapter(MeasurementSourcePort):
    """Read weight and body fat readings from the HealthPlanet inner-scan API."""

    def __init__(
        self,
        http_client: httpx.Client,
        access_token: str,
        *,
        api_url: str = "https://www.healthplanet.jp",
        lookback_days: int = 30,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._http_client = http_client
        self._access_token = access_token
        self._api_url = api_url.rstrip("/")
        self._lookback_days = lookback_days
        self._clock = clock

    def fetch_measurements(self) -> Dict[datetime, Measurement]:
        """Fetch readings for the lookback window, merged per timestamp."""

        now = self._clock()
        params = {
            "access_token": self._access_token,
            "date": "1",
            "from": (now - timedelta(days=self._lookback_days)).strftime("%Y%m%d%H%M%S"),
            "to": now.strftime("%Y%m%d%H%M%S"),
            "tag": f"{WEIGHT_TAG},{BODY_FAT_TAG}",
        }

        try:
            response = self._http_client.get(
                f"{self._api_url}/status/innerscan.json", params=params
            )
        except httpx.TransportError as exc:
            raise HealthPlanetError(f"Failed to reach HealthPlanet: {exc}") from exc

        if response.status_code != 200:
            raise HealthPlanetError(
                f"HealthPlanet API error: status {response.status_code}",
                response.status_code,
            )

        try:
            body: Any = response.json()
        except ValueError as exc:
            raise HealthPlanetError("HealthPlanet response is not JSON") from exc

        if not isinstance(body, dict):
            raise HealthPlanetError("HealthPlanet response is not a JSON object")

        rows: List[Dict[str, Any]] = body.get("data") or []
        readings: Dict[datetime, Dict[str, float]] = {}
        for row in rows:
            try:
                timestamp = datetime.strptime(row["date"], "%Y%m%d%H%M")
                value = float(row["keydata"])
                tag = row["tag"]
            except (KeyError, TypeError, ValueError) as exc:
                raise HealthPlanetError(f"Malformed inner-scan row: {row!r}") from exc

            if tag == WEIGHT_TAG:
                readings.setdefault(timestamp, {})["weight"] = value
            elif tag == BODY_FAT_TAG:
                readings.setdefault(timestamp, {})["body_fat_percent"] = value

        return {
            timestamp: Measurement(timestamp=timestamp, **values)
            for timestamp, values in sorted(readings.items())
        }


def create_healthplanet_adapter(
    *,
    http_client: httpx.Client,
    access_token: str,
    api_url: str,
    lookback_days: int,
) -> MeasurementSourcePort:
    """Create a HealthPlanet measurement source without CLI dependencies."""
    return HealthPlanetInnerScanAdapter(
        http_client,
        access_token,
        api_url=api_url,
        lookback_days=lookback_days,
    )
