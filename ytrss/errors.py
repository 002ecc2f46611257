"""Exceptions raised while turning channel URLs into feed URLs.

Two tiers: ResolutionError covers a single URL and is recorded per line in
file mode; BatchError aborts the whole file operation.
"""


class YtRssError(Exception):
    """Base class for all ytrss errors."""


class ResolutionError(YtRssError):
    """A single URL could not be resolved to a feed URL."""

    kind = "ResolutionError"

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class InvalidURL(ResolutionError):
    """Input is not a recognised YouTube channel URL."""

    kind = "InvalidURL"

    def __init__(self, url: str, reason: str = "not a recognised YouTube channel URL"):
        super().__init__(url, reason)
        self.reason = reason


class FetchFailed(ResolutionError):
    """The channel page could not be fetched (timeout, connection, HTTP status)."""

    kind = "FetchFailed"

    def __init__(self, url: str, cause: Exception):
        super().__init__(url, f"fetch failed: {cause}")
        self.cause = cause


class IDNotFound(ResolutionError):
    """The fetched page did not contain a channel ID."""

    kind = "IDNotFound"

    def __init__(self, url: str):
        super().__init__(url, "no channel ID found in page")


class BatchError(YtRssError):
    """File mode cannot proceed (unreadable input, empty input, unwritable output)."""
