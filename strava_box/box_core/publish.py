from __future__ import annotations

from ..exceptions import GistFetchError, GistUpdateError, StravaBoxError
from ..formatter import format_activities
from ..gist_client import GistClient, first_filename
from ..strava_client import StravaActivitySource
from ..utils import get_logger
from .config import build_credential_store
from .store import CredentialStore
from .types import PublisherConfig

logger = get_logger(__name__)


def resolve_access_token(store: CredentialStore, strava: StravaActivitySource) -> str:
    """
    Refresh the stored credential and persist the new pair before returning.

    The refresh is unconditional; there is no expiry check.
    """
    cached = store.load()
    credential = strava.refresh_credential(cached.refresh_token)
    store.save(credential)
    return credential.access_token


def publish_summary(gist_client: GistClient, gist_id: str, content: str, display_name: str | None = None) -> str:
    """Overwrite the first file of the gist and return its (unchanged) key."""
    try:
        gist = gist_client.get_gist(gist_id)
        filename = first_filename(gist)
    except StravaBoxError as e:
        logger.error(f"Unable to get gist {gist_id}\n{e}")
        raise GistFetchError(f"Unable to get gist {gist_id}: {e}", gist_id=gist_id) from e

    try:
        gist_client.update_file(gist_id, filename, content, display_name=display_name)
    except StravaBoxError as e:
        logger.error(f"Unable to update gist {gist_id}\n{e}")
        raise GistUpdateError(f"Unable to update gist {gist_id}: {e}", gist_id=gist_id) from e

    logger.info(f"Updated {filename} in gist {gist_id}")
    return filename


def run_publish(
    config: PublisherConfig,
    *,
    strava: StravaActivitySource | None = None,
    gist_client: GistClient | None = None,
    store: CredentialStore | None = None,
) -> str:
    """
    One full run: refresh token, read activities, format, publish.

    A failure after the token refresh leaves the new token saved and the gist
    unchanged; the next run starts from the saved token.
    """
    strava = strava or StravaActivitySource(
        config.strava.client_id,
        config.strava.client_secret,
        athlete_id=config.strava.athlete_id,
    )
    owns_gist_client = gist_client is None
    gist_client = gist_client or GistClient(config.github_token)
    try:
        store = store or build_credential_store(config, gist_client)

        resolve_access_token(store, strava)
        activities = strava.fetch_recent_activities()
        content = format_activities(activities)
        publish_summary(gist_client, config.gist_id, content, display_name=config.gist_display_name)
    finally:
        if owns_gist_client:
            gist_client.close()

    logger.info(f"Published {len(activities)} activities.")
    return content
