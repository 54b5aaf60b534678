from __future__ import annotations

"""Pydantic models for the /transcribe contract and the provider reply."""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TranscribeRequest(BaseModel):
    file_url: Optional[Any] = Field(default=None, alias="fileUrl")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",  # callers may send extra keys; they are ignored
    )

    @property
    def has_file_url(self) -> bool:
        return isinstance(self.file_url, str) and bool(self.file_url)


class ProviderTranscription(BaseModel):
    """Expected shape of a successful transcription reply.

    Only ``text`` is required; language, duration, segments and whatever
    else the provider adds are kept untouched.
    """

    text: str

    model_config = ConfigDict(extra="allow", strict=True)


class TranscribeResponse(BaseModel):
    transcript: str
    full_response: dict[str, Any]


@dataclass(frozen=True)
class AudioPayload:
    data: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)
