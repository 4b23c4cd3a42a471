"""
Error hierarchy

Every failure the guide pipeline can report to the user derives from
TvNowError, so the CLI can turn any of them into a single diagnostic line.
"""


class TvNowError(Exception):
    """Base exception for all guide errors."""
    pass


class FetchFailed(TvNowError):
    """A remote schedule page could not be retrieved.

    Wraps the transport-level exception so callers only ever see the URL
    and a readable message. Never retried.
    """

    def __init__(self, url: str, cause: BaseException | None = None):
        self.url = url
        self.cause = cause
        super().__init__(f"failed to fetch remote schedule: {url}")


class ParseStructureError(TvNowError):
    """Required markup region, attribute or title missing where expected."""
    pass


class InvalidTimestamp(ParseStructureError):
    """A slot start/end attribute is not a 12-digit YYYYMMDDHHmm stamp."""

    def __init__(self, value: str | None):
        self.value = value
        super().__init__(f"Invalid slot timestamp: '{value}'")


class UnknownAreaError(TvNowError):
    """Area name is not in the area table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is not in the area")
