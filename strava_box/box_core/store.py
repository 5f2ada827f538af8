"""Where the Strava token pair lives between runs."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Protocol

from ..exceptions import ConfigurationError, CredentialStoreError, StravaBoxError
from ..gist_client import GistClient, first_filename
from ..token_cipher import decrypt_token, encrypt_token
from ..type_defs import Credential
from ..utils import get_logger

logger = get_logger(__name__)

ACCESS_TOKEN_KEY = "stravaAccessToken"
REFRESH_TOKEN_KEY = "stravaRefreshToken"


class CredentialStore(Protocol):
    def load(self) -> Credential: ...

    def save(self, credential: Credential) -> None: ...


def _default_credential(default_refresh_token: str | None) -> Credential:
    if not default_refresh_token:
        raise ConfigurationError("No cached Strava refresh token and STRAVA_REFRESH_TOKEN is not set")
    return Credential(access_token="", refresh_token=default_refresh_token)


class LocalFileCredentialStore:
    """JSON cache file, overwritten on every run."""

    def __init__(self, path: Path | str, default_refresh_token: str | None = None):
        self.path = Path(path)
        self.default_refresh_token = default_refresh_token

    def load(self) -> Credential:
        cache = {REFRESH_TOKEN_KEY: self.default_refresh_token}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
            except ValueError as e:
                # JSONDecodeError and UnicodeDecodeError both land here
                logger.warning(f"json load {self.path} error: {e}")
                stored = {}
            except OSError as e:
                raise CredentialStoreError(f"Could not read token cache {self.path}: {e}") from e
            if isinstance(stored, dict):
                cache.update({k: v for k, v in stored.items() if v})
            else:
                logger.warning(f"Ignoring {self.path}: expected a JSON object")
        else:
            logger.warning(f"No token cache at {self.path}, using STRAVA_REFRESH_TOKEN")

        if not cache.get(REFRESH_TOKEN_KEY):
            return _default_credential(self.default_refresh_token)
        return Credential(
            access_token=cache.get(ACCESS_TOKEN_KEY) or "",
            refresh_token=cache[REFRESH_TOKEN_KEY],
        )

    def save(self, credential: Credential) -> None:
        data = {
            ACCESS_TOKEN_KEY: credential.access_token,
            REFRESH_TOKEN_KEY: credential.refresh_token,
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            # O_CREAT mode is ignored for a file that already exists
            self.path.chmod(0o600)
        except OSError as e:
            raise CredentialStoreError(f"Could not write token cache {self.path}: {e}") from e
        logger.info(f"Saved refreshed Strava tokens to {self.path}")


class EncryptedGistCredentialStore:
    """
    Refresh token kept encrypted in the first file of a private gist.

    Only the refresh token is stored.
    """

    def __init__(
        self,
        gist_client: GistClient,
        gist_id: str,
        key: str,
        default_refresh_token: str | None = None,
    ):
        self.gist_client = gist_client
        self.gist_id = gist_id
        self.key = key
        self.default_refresh_token = default_refresh_token
        self._filename: str | None = None

    def _read_gist(self):
        try:
            return self.gist_client.get_gist(self.gist_id)
        except StravaBoxError as e:
            raise CredentialStoreError(f"Unable to read token gist {self.gist_id}: {e}") from e

    def load(self) -> Credential:
        gist = self._read_gist()
        self._filename = filename = first_filename(gist)
        ciphertext = (gist["files"][filename].get("content") or "").strip()
        if not ciphertext:
            logger.warning(f"Token gist {self.gist_id} is empty, using STRAVA_REFRESH_TOKEN")
            return _default_credential(self.default_refresh_token)
        return Credential(access_token="", refresh_token=decrypt_token(ciphertext, self.key))

    def save(self, credential: Credential) -> None:
        filename = self._filename or first_filename(self._read_gist())
        try:
            self.gist_client.update_file(self.gist_id, filename, encrypt_token(credential.refresh_token, self.key))
        except StravaBoxError as e:
            raise CredentialStoreError(f"Unable to update token gist {self.gist_id}: {e}") from e
        logger.info(f"Saved encrypted Strava refresh token to gist {self.gist_id}")
