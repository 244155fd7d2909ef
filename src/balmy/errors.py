"""Exception types raised by the fetch pipeline."""

from __future__ import annotations


class BalmyError(Exception):
    """Base class for all balmy errors."""


class RemoteFetchError(BalmyError):
    """A remote resource could not be fetched or decoded.

    Covers transport failures, non-2xx responses, non-JSON bodies and payloads
    that fail schema validation. Fatal to the current fetch cycle.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url
