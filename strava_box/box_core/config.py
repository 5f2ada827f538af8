from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import GIST_DISPLAY_NAME, default_auth_cache_file
from ..exceptions import ConfigurationError
from ..gist_client import GistClient
from ..type_defs import EnvConfig
from ..utils import load_env_config
from .store import CredentialStore, EncryptedGistCredentialStore, LocalFileCredentialStore
from .types import PublisherConfig, StravaCredentials, TokenGist


@dataclass(frozen=True)
class CredentialInput:
    gist_id: str | None = None
    github_token: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    refresh_token: str | None = None
    athlete_id: str | None = None


def resolve_publisher_config(input_data: CredentialInput, env_config: Optional[EnvConfig] = None) -> PublisherConfig:
    env_config = env_config if env_config is not None else load_env_config()
    gist_id = input_data.gist_id or env_config.get("gist_id")
    github_token = input_data.github_token or env_config.get("github_token")
    client_id = input_data.client_id or env_config.get("strava_client_id")
    client_secret = input_data.client_secret or env_config.get("strava_client_secret")
    refresh_token = input_data.refresh_token or env_config.get("strava_refresh_token")
    athlete_id = input_data.athlete_id or env_config.get("strava_athlete_id")

    required = {
        "GIST_ID": gist_id,
        "GITHUB_TOKEN": github_token,
        "STRAVA_CLIENT_ID": client_id,
        "STRAVA_CLIENT_SECRET": client_secret,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing configuration: {', '.join(missing)}. Provide them in the environment or .env.local."
        )

    token_gist_id = env_config.get("strava_token_gist_id")
    token_key = env_config.get("strava_token_key")
    if bool(token_gist_id) != bool(token_key):
        raise ConfigurationError("STRAVA_TOKEN_GIST_ID and STRAVA_TOKEN_KEY must be set together")
    token_gist = TokenGist(gist_id=str(token_gist_id), key=str(token_key)) if token_gist_id else None

    cache_file = env_config.get("strava_auth_cache_file")
    return PublisherConfig(
        gist_id=str(gist_id),
        github_token=str(github_token),
        strava=StravaCredentials(
            client_id=str(client_id),
            client_secret=str(client_secret),
            refresh_token=refresh_token,
            athlete_id=athlete_id,
        ),
        auth_cache_file=Path(cache_file) if cache_file else default_auth_cache_file(),
        gist_display_name=env_config.get("gist_filename") or GIST_DISPLAY_NAME,
        token_gist=token_gist,
    )


def build_credential_store(config: PublisherConfig, gist_client: GistClient) -> CredentialStore:
    if config.token_gist is not None:
        return EncryptedGistCredentialStore(
            gist_client,
            config.token_gist.gist_id,
            config.token_gist.key,
            default_refresh_token=config.strava.refresh_token,
        )
    return LocalFileCredentialStore(config.auth_cache_file, default_refresh_token=config.strava.refresh_token)
