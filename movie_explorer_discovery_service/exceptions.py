"""Error kinds raised by the discovery service."""


class DiscoveryServiceError(Exception):
    """Base class for all service errors."""


class ConfigurationError(DiscoveryServiceError):
    """A required setting (e.g. the TMDB API key) is missing."""


class FetchError(DiscoveryServiceError):
    """The metadata source returned a non-success status or was unreachable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AttributionNotFoundError(DiscoveryServiceError):
    """The seed movie lacks the attribution needed for a discovery mode."""


class NoDirectorFoundError(AttributionNotFoundError):
    """The seed movie has no credited director."""

    def __init__(self, movie_id: int):
        super().__init__("No director found for this movie")
        self.movie_id = movie_id


class NoStudioFoundError(AttributionNotFoundError):
    """The seed movie has no production company."""

    def __init__(self, movie_id: int):
        super().__init__("No production company found for this movie")
        self.movie_id = movie_id


class NotFoundError(DiscoveryServiceError):
    """A referenced user, session or entity does not exist."""
