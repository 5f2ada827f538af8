"""
strava-box: keep a GitHub gist updated with your latest Strava activities.
"""

from .box_core.config import CredentialInput, resolve_publisher_config
from .box_core.publish import publish_summary, resolve_access_token, run_publish
from .formatter import format_activities, format_activity_line

__version__ = "0.1.0"

__all__ = [
    "CredentialInput",
    "resolve_publisher_config",
    "resolve_access_token",
    "publish_summary",
    "run_publish",
    "format_activities",
    "format_activity_line",
]
