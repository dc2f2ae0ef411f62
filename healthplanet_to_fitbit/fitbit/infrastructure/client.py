"""HTTP-backed implementation of the Fitbit body log port."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ...models.body import WeightLog
from ..application.ports import (
    FitbitDecodeError,
    FitbitHTTPError,
    FitbitLogPort,
    FitbitTokenPort,
)


class FitbitLogClient(FitbitLogPort):
    """Read and write Fitbit body logs with bearer tokens from the token port."""

    def __init__(
        self,
        http_client: httpx.Client,
        tokens: FitbitTokenPort,
        api_url: str = "https://api.fitbit.com",
    ) -> None:
        self._http_client = http_client
        self._tokens = tokens
        self._api_url = api_url.rstrip("/")

    def get_weight_log(self, day: date) -> WeightLog:
        response = self._send(
            "GET", f"/1/user/-/body/log/weight/date/{day:%Y-%m-%d}.json"
        )
        if not 200 <= response.status_code < 300:
            raise FitbitHTTPError(
                f"failed to get weight log in fitbit(invalid status code): {response.status_code}",
                response.status_code,
            )

        try:
            return WeightLog.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise FitbitDecodeError(
                f"failed to parse weight log in fitbit: {exc}"
            ) from exc

    def create_weight_log(self, weight: float, timestamp: datetime) -> None:
        self._create("weight", weight, timestamp)

    def create_body_fat_log(self, fat: float, timestamp: datetime) -> None:
        self._create("fat", fat, timestamp)

    def _create(self, kind: str, value: float, timestamp: datetime) -> None:
        params = {
            kind: f"{value:.2f}",
            "date": timestamp.strftime("%Y-%m-%d"),
            "time": timestamp.strftime("%H:%M:%S"),
        }
        response = self._send("POST", f"/1/user/-/body/log/{kind}.json", params=params)
        if not 200 <= response.status_code < 400:
            raise FitbitHTTPError(
                f"failed to create {kind} log in fitbit(invalid status code): {response.status_code}",
                response.status_code,
            )

    def _send(
        self, method: str, path: str, *, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        url = f"{self._api_url}{path}"
        access_token = self._tokens.ensure_valid_token()
        response = self._request(method, url, access_token, params)
        if response.status_code == 401:
            access_token = self._tokens.refresh().access_token
            response = self._request(method, url, access_token, params)
        return response

    def _request(
        self,
        method: str,
        url: str,
        access_token: str,
        params: Optional[Dict[str, Any]],
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            return self._http_client.request(method, url, headers=headers, params=params)
        except httpx.TransportError as exc:
            raise FitbitHTTPError(f"{method} {url} failed: {exc}") from exc


def create_fitbit_log_client(
    *, http_client: httpx.Client, tokens: FitbitTokenPort, api_url: str
) -> FitbitLogPort:
    """Create a Fitbit log client without CLI dependencies."""
    return FitbitLogClient(http_client, tokens, api_url)
