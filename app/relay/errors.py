from __future__ import annotations

"""Relay failures that map one-to-one onto HTTP responses.

Every failure the relay knows how to classify is a ``RelayError``; the
``/transcribe`` route turns it into a JSON response with ``status_code`` and
``body``. Anything else is an unclassified fault and becomes a plain 500.
"""

from typing import Any


MISSING_FILE_URL = 'Missing "fileUrl" in request body.'
DOWNLOAD_FAILED = "Failed to download audio from the provided URL."
AUDIO_TOO_LARGE = "Audio file exceeds the maximum allowed size."
PROVIDER_FAILED = "OpenAI returned an error"
PROVIDER_BAD_JSON = "Failed to parse JSON from OpenAI"
INTERNAL_ERROR = "Internal server error"


class RelayError(Exception):
    """Base class: carries the HTTP status and JSON body to send back."""

    status_code: int = 500

    def __init__(self, message: str, **fields: Any) -> None:
        super().__init__(message)
        self.message = message
        self.fields = fields

    @property
    def body(self) -> dict[str, Any]:
        return {"error": self.message, **self.fields}


class MissingFileUrlError(RelayError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__(MISSING_FILE_URL)


class AudioDownloadError(RelayError):
    status_code = 400

    def __init__(self, upstream_status: int, details: str) -> None:
        super().__init__(DOWNLOAD_FAILED, details=details)
        self.upstream_status = upstream_status


class AudioTooLargeError(RelayError):
    status_code = 413

    def __init__(self, limit: int) -> None:
        super().__init__(AUDIO_TOO_LARGE, details=f"{limit} bytes limit")
        self.limit = limit


class ProviderError(RelayError):
    """The provider answered with a non-2xx status; mirrored back verbatim."""

    def __init__(self, status: int, raw_response: str) -> None:
        super().__init__(PROVIDER_FAILED, status=status, raw_response=raw_response)
        self.status_code = status


class ProviderParseError(RelayError):
    status_code = 500

    def __init__(self, raw_response: str) -> None:
        super().__init__(PROVIDER_BAD_JSON, raw_response=raw_response)
