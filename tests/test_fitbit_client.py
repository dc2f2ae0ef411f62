"""Fitbit body log client behaviour."""

from __future__ import annotations

from datetime import date, datetime

import httpx
import pytest
import respx

from healthplanet_to_fitbit.credentials import persist_rotated_tokens
from healthplanet_to_fitbit.fitbit import (
    FitbitAuthError,
    FitbitDecodeError,
    FitbitHTTPError,
    FitbitLogClient,
    FitbitTokenManager,
)
from healthplanet_to_fitbit.models import TokenPair

from tests.builders import make_fitbit_token_response, make_weight_log_entry
from tests.conftest import FITBIT_URL, FrozenClock
from tests.fakes import CredentialStoreFake

WEIGHT_LOG_URL = f"{FITBIT_URL}/1/user/-/body/log/weight/date/2024-03-01.json"
CREATE_WEIGHT_URL = f"{FITBIT_URL}/1/user/-/body/log/weight.json"
CREATE_FAT_URL = f"{FITBIT_URL}/1/user/-/body/log/fat.json"
TIMESTAMP = datetime(2024, 3, 1, 7, 0, 0)


class TokenPortStub:
    """Token port double handing out numbered access tokens."""

    def __init__(self) -> None:
        self.current = "token-1"
        self.refreshes = 0

    def ensure_valid_token(self) -> str:
        return self.current

    def refresh(self) -> TokenPair:
        self.refreshes += 1
        self.current = f"token-{self.refreshes + 1}"
        return TokenPair(access_token=self.current, refresh_token="refresh")


@pytest.fixture
def tokens() -> TokenPortStub:
    return TokenPortStub()


@pytest.fixture
def fitbit_client(tokens: TokenPortStub):
    with httpx.Client() as http_client:
        yield FitbitLogClient(http_client, tokens, FITBIT_URL)


@respx.mock
def test_get_weight_log_parses_entries(fitbit_client: FitbitLogClient) -> None:
    route = respx.get(WEIGHT_LOG_URL).mock(
        return_value=httpx.Response(200, json={"weight": [make_weight_log_entry()]})
    )

    log = fitbit_client.get_weight_log(date(2024, 3, 1))

    assert route.calls.last.request.headers["Authorization"] == "Bearer token-1"
    assert not log.is_empty()
    entry = log.weight[0]
    assert entry.log_id == 1709276400000
    assert entry.weight == 65.5
    assert entry.time == "07:00:00"


@respx.mock
def test_get_weight_log_empty_day(fitbit_client: FitbitLogClient) -> None:
    respx.get(WEIGHT_LOG_URL).mock(return_value=httpx.Response(200, json={"weight": []}))

    assert fitbit_client.get_weight_log(date(2024, 3, 1)).is_empty()


@respx.mock
@pytest.mark.parametrize("status", [302, 404, 500])
def test_get_weight_log_non_2xx_raises(status: int, fitbit_client: FitbitLogClient) -> None:
    respx.get(WEIGHT_LOG_URL).mock(return_value=httpx.Response(status))

    with pytest.raises(FitbitHTTPError) as excinfo:
        fitbit_client.get_weight_log(date(2024, 3, 1))

    assert excinfo.value.status_code == status


@respx.mock
@pytest.mark.parametrize(
    "response",
    [
        pytest.param(httpx.Response(200, text="<html>"), id="not_json"),
        pytest.param(httpx.Response(200, json={"weight": [{"weight": 65.5}]}), id="missing_date"),
        pytest.param(httpx.Response(200, json=[]), id="not_object"),
    ],
)
def test_get_weight_log_malformed_body_raises_decode_error(
    response: httpx.Response, fitbit_client: FitbitLogClient
) -> None:
    respx.get(WEIGHT_LOG_URL).mock(return_value=response)

    with pytest.raises(FitbitDecodeError):
        fitbit_client.get_weight_log(date(2024, 3, 1))


@respx.mock
def test_create_weight_log_sends_formatted_query(fitbit_client: FitbitLogClient) -> None:
    route = respx.post(CREATE_WEIGHT_URL).mock(return_value=httpx.Response(201))

    fitbit_client.create_weight_log(65.5, TIMESTAMP)

    request = route.calls.last.request
    assert request.url.params["weight"] == "65.50"
    assert request.url.params["date"] == "2024-03-01"
    assert request.url.params["time"] == "07:00:00"
    assert request.headers["Authorization"] == "Bearer token-1"


@respx.mock
def test_create_body_fat_log_sends_formatted_query(fitbit_client: FitbitLogClient) -> None:
    route = respx.post(CREATE_FAT_URL).mock(return_value=httpx.Response(201))

    fitbit_client.create_body_fat_log(18.234, datetime(2024, 3, 1, 21, 5, 9))

    params = route.calls.last.request.url.params
    assert dict(params) == {"fat": "18.23", "date": "2024-03-01", "time": "21:05:09"}


@respx.mock
@pytest.mark.parametrize("status", [200, 201, 204, 302, 399])
def test_create_accepts_statuses_below_400(status: int, fitbit_client: FitbitLogClient) -> None:
    respx.post(CREATE_WEIGHT_URL).mock(return_value=httpx.Response(status))

    fitbit_client.create_weight_log(65.5, TIMESTAMP)


@respx.mock
@pytest.mark.parametrize("status", [199, 400, 404, 429, 500])
def test_create_rejects_statuses_outside_success_range(
    status: int, fitbit_client: FitbitLogClient
) -> None:
    respx.post(CREATE_FAT_URL).mock(return_value=httpx.Response(status))

    with pytest.raises(FitbitHTTPError) as excinfo:
        fitbit_client.create_body_fat_log(18.2, TIMESTAMP)

    assert excinfo.value.status_code == status


@respx.mock
def test_unauthorized_refreshes_and_retries_once(
    fitbit_client: FitbitLogClient, tokens: TokenPortStub
) -> None:
    route = respx.post(CREATE_WEIGHT_URL).mock(
        side_effect=[httpx.Response(401), httpx.Response(201)]
    )

    fitbit_client.create_weight_log(65.5, TIMESTAMP)

    assert tokens.refreshes == 1
    assert route.call_count == 2
    first, second = route.calls
    assert first.request.headers["Authorization"] == "Bearer token-1"
    assert second.request.headers["Authorization"] == "Bearer token-2"
    assert first.request.url == second.request.url


@respx.mock
def test_second_unauthorized_is_surfaced(
    fitbit_client: FitbitLogClient, tokens: TokenPortStub
) -> None:
    route = respx.get(WEIGHT_LOG_URL).mock(return_value=httpx.Response(401))

    with pytest.raises(FitbitHTTPError) as excinfo:
        fitbit_client.get_weight_log(date(2024, 3, 1))

    assert excinfo.value.status_code == 401
    assert tokens.refreshes == 1
    assert route.call_count == 2


@respx.mock
def test_transport_error_becomes_http_error(fitbit_client: FitbitLogClient) -> None:
    respx.post(CREATE_WEIGHT_URL).mock(side_effect=httpx.ConnectError("down"))

    with pytest.raises(FitbitHTTPError) as excinfo:
        fitbit_client.create_weight_log(65.5, TIMESTAMP)

    assert excinfo.value.status_code is None


@respx.mock
def test_unauthorized_with_token_manager_persists_rotation(
    credential_store_fake: CredentialStoreFake, freeze_time: FrozenClock
) -> None:
    token_route = respx.post(f"{FITBIT_URL}/oauth2/token").mock(
        side_effect=[
            httpx.Response(
                200, json=make_fitbit_token_response(access_token="a1", refresh_token="r1")
            ),
            httpx.Response(
                200, json=make_fitbit_token_response(access_token="a2", refresh_token="r2")
            ),
        ]
    )
    log_route = respx.get(WEIGHT_LOG_URL).mock(
        side_effect=[httpx.Response(401), httpx.Response(200, json={"weight": []})]
    )

    with httpx.Client() as http_client:
        manager = FitbitTokenManager(
            http_client,
            TokenPair(access_token="old-access", refresh_token="old-refresh"),
            client_id="fitbit-client",
            token_url=f"{FITBIT_URL}/oauth2/token",
            on_token_rotated=persist_rotated_tokens(credential_store_fake),
            clock=freeze_time,
        )
        client = FitbitLogClient(http_client, manager, FITBIT_URL)
        client.get_weight_log(date(2024, 3, 1))

    assert token_route.call_count == 2
    assert log_route.calls.last.request.headers["Authorization"] == "Bearer a2"
    assert [update["FITBIT_REFRESH_TOKEN"] for update in credential_store_fake.updates] == [
        "r1",
        "r2",
    ]
    assert credential_store_fake.store["FITBIT_ACCESS_TOKEN"] == "a2"


@respx.mock
def test_refresh_failure_during_retry_is_auth_error(freeze_time: FrozenClock) -> None:
    respx.post(f"{FITBIT_URL}/oauth2/token").mock(
        side_effect=[
            httpx.Response(200, json=make_fitbit_token_response()),
            httpx.Response(401, json={"errors": []}),
        ]
    )
    respx.post(CREATE_WEIGHT_URL).mock(return_value=httpx.Response(401))

    with httpx.Client() as http_client:
        manager = FitbitTokenManager(
            http_client,
            TokenPair(access_token="old-access", refresh_token="old-refresh"),
            client_id="fitbit-client",
            token_url=f"{FITBIT_URL}/oauth2/token",
            clock=freeze_time,
        )
        client = FitbitLogClient(http_client, manager, FITBIT_URL)
        with pytest.raises(FitbitAuthError):
            client.create_weight_log(65.5, TIMESTAMP)
