"""Type definitions for raw API payloads and configuration."""

from dataclasses import dataclass
from typing import Optional, TypedDict


class ActivityDict(TypedDict, total=False):
    """Summary activity as returned by ``GET /athlete/activities``."""

    id: int
    name: str
    type: str
    sport_type: str
    distance: float
    moving_time: int
    elapsed_time: int
    average_speed: float
    start_date: str
    start_date_local: str


class GistFileDict(TypedDict, total=False):
    filename: str
    type: str
    language: Optional[str]
    raw_url: str
    size: int
    truncated: bool
    content: str


class GistDict(TypedDict, total=False):
    """Subset of the GitHub gist document used here."""

    id: str
    description: Optional[str]
    public: bool
    files: dict[str, GistFileDict]


class EnvConfig(TypedDict, total=False):
    """Environment configuration keyed by lower-case names."""

    gist_id: Optional[str]
    github_token: Optional[str]
    strava_athlete_id: Optional[str]
    strava_client_id: Optional[str]
    strava_client_secret: Optional[str]
    strava_refresh_token: Optional[str]
    strava_token_gist_id: Optional[str]
    strava_token_key: Optional[str]
    strava_auth_cache_file: Optional[str]
    gist_filename: Optional[str]


@dataclass(frozen=True)
class Credential:
    """Strava OAuth token pair."""

    access_token: str
    refresh_token: str
