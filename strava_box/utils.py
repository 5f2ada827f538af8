import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import TOKEN_LOG_PREFIX, default_env_file
from .type_defs import EnvConfig

ENV_KEYS = (
    "GIST_ID",
    "GITHUB_TOKEN",
    "STRAVA_ATHLETE_ID",
    "STRAVA_CLIENT_ID",
    "STRAVA_CLIENT_SECRET",
    "STRAVA_REFRESH_TOKEN",
    "STRAVA_TOKEN_GIST_ID",
    "STRAVA_TOKEN_KEY",
    "STRAVA_AUTH_CACHE_FILE",
    "GIST_FILENAME",
)


class SensitiveFilter(logging.Filter):
    """
    Filter to redact sensitive information from logs.
    """

    sensitive_keys = {
        "client_secret",
        "refresh_token",
        "access_token",
        "github_token",
        "token_key",
        "stravaAccessToken",
        "stravaRefreshToken",
    }

    def filter(self, record):
        sensitive_keys = self.sensitive_keys

        def redact_data(data):
            if isinstance(data, dict):
                return {k: ("***" if k in sensitive_keys else redact_data(v)) for k, v in data.items()}
            elif isinstance(data, list):
                return [redact_data(item) for item in data]
            return data

        # Redact args if present
        if record.args:
            if isinstance(record.args, dict):
                record.args = redact_data(record.args)
            elif isinstance(record.args, (list, tuple)):
                record.args = tuple(redact_data(arg) for arg in record.args)

        # Redact message if it contains sensitive keys (handling f-strings or pre-formatted messages)
        if isinstance(record.msg, str):
            msg = record.msg
            for key in sensitive_keys:
                # Matches: 'refresh_token': 'value' or "refresh_token": "value"
                pattern = f"(['\"]?{key}['\"]?)\\s*:\\s*(['\"])(.*?)\\2"
                msg = re.sub(pattern, r"\1: \2***\2", msg)
            record.msg = msg

        return True


_logging_configured = False


def get_logger(name):
    """
    Creates and configures a logger.
    Configures the root logger with RichHandler once, so every module shares the same output.
    """
    global _logging_configured

    if not _logging_configured:
        root_logger = logging.getLogger()
        # Remove existing handlers to avoid duplicates/conflicts
        if root_logger.handlers:
            for handler in root_logger.handlers[:]:
                root_logger.removeHandler(handler)

        root_logger.setLevel(logging.INFO)

        handler = RichHandler(rich_tracebacks=True, show_time=True, show_path=False)
        handler.addFilter(SensitiveFilter())

        root_logger.addHandler(handler)
        _logging_configured = True

    return logging.getLogger(name)


logger = get_logger(__name__)


def mask_token(token: Optional[str]) -> str:
    """Return the loggable prefix of a token."""
    if not token:
        return "<empty>"
    return f"{token[:TOKEN_LOG_PREFIX]}***"


def parse_env_file(env_path: Path) -> dict[str, str]:
    config: dict[str, str] = {}
    with open(env_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                config[key.strip()] = value.strip().strip("\"'")
    return config


def load_env_config(env_file: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> EnvConfig:
    """
    Collect configuration from ``.env.local`` and the process environment.

    Values from the environment take precedence over the file.
    """
    env_path = Path(env_file) if env_file is not None else default_env_file()
    environ = os.environ if environ is None else environ

    config: dict[str, str] = {}
    if env_path.exists():
        config.update(parse_env_file(env_path))
        logger.debug(f"Loaded configuration file {env_path}")

    for key in ENV_KEYS:
        value = environ.get(key)
        if value:
            config[key] = value

    return {key.lower(): config.get(key) for key in ENV_KEYS}
