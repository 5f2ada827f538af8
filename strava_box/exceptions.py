"""Exception types raised across strava-box."""


class StravaBoxError(Exception):
    """Base error for the package."""

    pass


class ConfigurationError(StravaBoxError):
    """Missing or inconsistent configuration."""

    pass


class AuthenticationError(StravaBoxError):
    """Credential rejected by Strava or GitHub."""

    pass


class NetworkError(StravaBoxError):
    """Transport level failure talking to a remote API."""

    pass


class MalformedResponseError(StravaBoxError):
    """A remote API answered with a body we cannot use."""

    pass


class CredentialStoreError(StravaBoxError):
    """The persisted credential could not be read, decrypted or written."""

    pass


class GistError(StravaBoxError):
    """Gist publishing failed. The underlying category is chained as ``__cause__``."""

    def __init__(self, message: str, gist_id: str | None = None):
        super().__init__(message)
        self.gist_id = gist_id


class GistFetchError(GistError):
    """The gist could not be fetched for reading."""

    pass


class GistUpdateError(GistError):
    """The gist update call was rejected or never completed."""

    pass
