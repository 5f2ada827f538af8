"""Tests for strava_box.strava_client module."""

import pytest
import requests
from stravalib.exc import AccessUnauthorized, Fault, RateLimitExceeded

from strava_box.exceptions import AuthenticationError, ConfigurationError, MalformedResponseError, NetworkError
from strava_box.strava_client import StravaActivitySource
from strava_box.type_defs import Credential


@pytest.fixture
def source(strava_api):
    return StravaActivitySource("12345", "secret123", athlete_id="42", client=strava_api)


class TestRefreshCredential:
    def test_exchanges_refresh_token(self, source, strava_api):
        credential = source.refresh_credential("refresh123")

        assert credential == Credential(access_token="access-fixed-token", refresh_token="refresh-rotated-token")
        strava_api.refresh_access_token.assert_called_once_with(
            client_id="12345",
            client_secret="secret123",
            refresh_token="refresh123",
        )
        assert strava_api.access_token == "access-fixed-token"

    def test_empty_refresh_token_raises(self, source, strava_api):
        with pytest.raises(ConfigurationError):
            source.refresh_credential("")
        strava_api.refresh_access_token.assert_not_called()

    def test_rejected_exchange_is_authentication_error(self, source, strava_api):
        strava_api.refresh_access_token.side_effect = Fault("400 Client Error: Bad Request")
        with pytest.raises(AuthenticationError):
            source.refresh_credential("revoked")

    def test_network_failure(self, source, strava_api):
        strava_api.refresh_access_token.side_effect = requests.exceptions.ConnectionError("unreachable")
        with pytest.raises(NetworkError):
            source.refresh_credential("refresh123")

    def test_missing_token_in_response(self, source, strava_api):
        strava_api.refresh_access_token.return_value = {"message": "Bad Request"}
        with pytest.raises(MalformedResponseError):
            source.refresh_credential("refresh123")


class TestFetchRecentActivities:
    def test_returns_activities_unchanged(self, source, strava_api, sample_activities):
        activities = source.fetch_recent_activities()

        assert activities == sample_activities
        strava_api.protocol.get.assert_called_once_with("/athlete/activities", per_page=5)

    def test_unauthorized(self, source, strava_api):
        strava_api.protocol.get.side_effect = AccessUnauthorized("401 Unauthorized")
        with pytest.raises(AuthenticationError):
            source.fetch_recent_activities()

    def test_error_status(self, source, strava_api):
        strava_api.protocol.get.side_effect = Fault("500 Server Error")
        with pytest.raises(MalformedResponseError):
            source.fetch_recent_activities()

    def test_rate_limited(self, source, strava_api):
        strava_api.protocol.get.side_effect = RateLimitExceeded("Rate limit exceeded")
        with pytest.raises(NetworkError):
            source.fetch_recent_activities()

    def test_error_object_instead_of_list(self, source, strava_api):
        strava_api.protocol.get.return_value = {"message": "Authorization Error", "errors": []}
        with pytest.raises(MalformedResponseError):
            source.fetch_recent_activities()

    def test_non_json_body(self, source, strava_api):
        strava_api.protocol.get.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        with pytest.raises(MalformedResponseError):
            source.fetch_recent_activities()


class TestFetchAthleteStats:
    def test_reads_stats_for_configured_athlete(self, source, strava_api):
        strava_api.protocol.get.return_value = {"all_run_totals": {"count": 10, "distance": 50000.0}}

        stats = source.fetch_athlete_stats()

        assert stats["all_run_totals"]["count"] == 10
        strava_api.protocol.get.assert_called_once_with("/athletes/{athlete_id}/stats", athlete_id="42")

    def test_requires_athlete_id(self, strava_api):
        source = StravaActivitySource("12345", "secret123", client=strava_api)
        with pytest.raises(ConfigurationError):
            source.fetch_athlete_stats()
