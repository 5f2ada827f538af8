from pathlib import Path
from typing import Final

ENV_FILE_NAME: Final[str] = ".env.local"
AUTH_CACHE_FILE_NAME: Final[str] = "strava-auth.json"

STRAVA_ACTIVITIES_PATH: Final[str] = "/athlete/activities"
STRAVA_ATHLETE_STATS_PATH: Final[str] = "/athletes/{athlete_id}/stats"
GITHUB_API_URL: Final[str] = "https://api.github.com"

# Strava returns the newest activities first
ACTIVITY_COUNT: Final[int] = 5

GIST_DISPLAY_NAME: Final[str] = "Recent Strava Activities"

# Line layout
TYPE_WIDTH: Final[int] = 4
DATE_WIDTH: Final[int] = 10
LINE_SEPARATOR: Final[str] = " | "
UNKNOWN_PACE: Final[str] = "--:--"

# Number of leading characters of a token that may be logged
TOKEN_LOG_PREFIX: Final[int] = 6


# Relative to the directory the command runs in, not the installed package
def default_env_file() -> Path:
    return Path.cwd() / ENV_FILE_NAME


def default_auth_cache_file() -> Path:
    return Path.cwd() / AUTH_CACHE_FILE_NAME
