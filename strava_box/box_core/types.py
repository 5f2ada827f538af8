from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class StravaCredentials:
    client_id: str
    client_secret: str
    refresh_token: Optional[str]
    athlete_id: Optional[str] = None


@dataclass(frozen=True)
class TokenGist:
    gist_id: str
    key: str


@dataclass(frozen=True)
class PublisherConfig:
    gist_id: str
    github_token: str
    strava: StravaCredentials
    auth_cache_file: Path
    gist_display_name: str
    token_gist: Optional[TokenGist] = None
