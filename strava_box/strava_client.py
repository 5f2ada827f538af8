"""Strava API interaction: token exchange and recent activity reads."""

from typing import Any, Callable, Optional

import requests
import stravalib
from stravalib.exc import AccessUnauthorized, Fault, RateLimitExceeded

from .config import ACTIVITY_COUNT, STRAVA_ACTIVITIES_PATH, STRAVA_ATHLETE_STATS_PATH
from .exceptions import AuthenticationError, ConfigurationError, MalformedResponseError, NetworkError
from .type_defs import ActivityDict, Credential
from .utils import get_logger, mask_token


def make_strava_client() -> stravalib.Client:
    return stravalib.Client()


class StravaActivitySource:
    """Reads from Strava on behalf of one athlete using a refreshable token."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        athlete_id: Optional[str] = None,
        client: Optional[stravalib.Client] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.athlete_id = athlete_id
        self.client = client if client is not None else make_strava_client()
        self.logger = get_logger(self.__class__.__name__)

    def _call(self, action: str, func: Callable[..., Any], *args, rejected_is_auth: bool = False, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except AccessUnauthorized as e:
            raise AuthenticationError(f"Strava rejected the credential while trying to {action}: {e}") from e
        except RateLimitExceeded as e:
            raise NetworkError(f"Strava rate limit exceeded while trying to {action}: {e}") from e
        except Fault as e:
            if rejected_is_auth:
                raise AuthenticationError(f"Strava refused to {action}: {e}") from e
            raise MalformedResponseError(f"Strava returned an error while trying to {action}: {e}") from e
        except requests.exceptions.JSONDecodeError as e:
            raise MalformedResponseError(f"Strava sent a non-JSON body while trying to {action}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Could not reach Strava to {action}: {e}") from e

    def refresh_credential(self, refresh_token: str) -> Credential:
        """
        Exchange a refresh token for a new token pair.

        Strava may rotate the refresh token, so the caller must persist the
        returned pair before the old one is used again.
        """
        if not refresh_token:
            raise ConfigurationError("A Strava refresh token is required")

        self.logger.debug(f"ref: {mask_token(refresh_token)}")
        response = self._call(
            "exchange the refresh token",
            self.client.refresh_access_token,
            client_id=self.client_id,
            client_secret=self.client_secret,
            refresh_token=refresh_token,
            rejected_is_auth=True,
        )
        try:
            credential = Credential(
                access_token=response["access_token"],
                refresh_token=response["refresh_token"],
            )
        except (KeyError, TypeError) as e:
            raise MalformedResponseError(f"Token response is missing {e}") from e
        if not credential.access_token or not credential.refresh_token:
            raise MalformedResponseError("Token response contained an empty token")

        self.client.access_token = credential.access_token
        self.logger.debug(f"acc: {mask_token(credential.access_token)}")
        self.logger.debug(f"ref: {mask_token(credential.refresh_token)}")
        self.logger.info("Strava access token refreshed successfully.")
        return credential

    def fetch_recent_activities(self, limit: int = ACTIVITY_COUNT) -> list[ActivityDict]:
        """Newest activities first, exactly as Strava orders them."""
        activities = self._call(
            "list recent activities",
            self.client.protocol.get,
            STRAVA_ACTIVITIES_PATH,
            per_page=limit,
        )
        if not isinstance(activities, list):
            raise MalformedResponseError(f"Expected a list of activities, got: {activities!r}")
        self.logger.info(f"Fetched {len(activities)} activities from Strava.")
        return activities

    def fetch_athlete_stats(self) -> dict[str, Any]:
        """Totals for the configured athlete (recent, year-to-date and all-time)."""
        if not self.athlete_id:
            raise ConfigurationError("STRAVA_ATHLETE_ID is required to read athlete stats")
        stats = self._call(
            "read athlete stats",
            self.client.protocol.get,
            STRAVA_ATHLETE_STATS_PATH,
            athlete_id=self.athlete_id,
        )
        if not isinstance(stats, dict):
            raise MalformedResponseError(f"Expected athlete stats object, got: {stats!r}")
        return stats
