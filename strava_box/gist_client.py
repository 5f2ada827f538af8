"""Minimal GitHub gist client: read one gist, replace one of its files."""

from typing import Optional

import httpx

from .config import GITHUB_API_URL
from .exceptions import AuthenticationError, MalformedResponseError, NetworkError
from .type_defs import GistDict
from .utils import get_logger

TIME_OUT = httpx.Timeout(30.0, connect=10.0)

logger = get_logger(__name__)


def first_filename(gist: GistDict) -> str:
    """The key of the first file, in the order the API listed them."""
    files = gist.get("files") or {}
    if not isinstance(files, dict) or not files:
        raise MalformedResponseError(f"Gist {gist.get('id', '?')} has no files")
    return next(iter(files))


class GistClient:
    def __init__(self, github_token: str, http_client: Optional[httpx.Client] = None):
        self.req = http_client if http_client is not None else httpx.Client(base_url=GITHUB_API_URL, timeout=TIME_OUT)
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {github_token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def close(self) -> None:
        self.req.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> GistDict:
        try:
            response = self.req.request(method, url, headers=self.headers, **kwargs)
            logger.debug(f"{method} {url} got response code {response.status_code}")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as err:
            status = err.response.status_code
            if status in (401, 403):
                raise AuthenticationError(f"GitHub rejected the token ({status})") from err
            raise MalformedResponseError(f"GitHub answered {status} for {method} {url}") from err
        except httpx.RequestError as err:
            raise NetworkError(f"Could not reach GitHub: {err}") from err
        except ValueError as err:
            raise MalformedResponseError(f"GitHub sent a non-JSON body for {method} {url}") from err

        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected a gist object from {method} {url}")
        return data

    def get_gist(self, gist_id: str) -> GistDict:
        return self._request("GET", f"/gists/{gist_id}")

    def update_file(self, gist_id: str, filename: str, content: str, display_name: Optional[str] = None) -> GistDict:
        """
        Replace the content of ``filename`` inside the gist.

        ``display_name`` renames the file as shown on GitHub; the other files of
        the gist are left untouched.
        """
        file_patch = {"content": content}
        if display_name:
            file_patch["filename"] = display_name
        return self._request("PATCH", f"/gists/{gist_id}", json={"files": {filename: file_patch}})
