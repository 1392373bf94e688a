"""
Content parts: the tagged variant carried inside a :class:`Content`.

A part is exactly one of :class:`Text`, :class:`Blob` (inline bytes) or
:class:`FileData` (a reference to a stored file). All three are frozen so a
part can be shared between the per-chunk response handed to the caller and
the merged aggregate without either side observing mutation.

Every consumption site (codec, merge, rendering) matches on these three types
explicitly and raises ``TypeError`` for anything else.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Text:
    """A piece of text, like a question or phrase."""

    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text}


@dataclass(frozen=True)
class Blob:
    """Inline binary data with its MIME type (e.g. ``image/png``)."""

    mime_type: str
    data: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {"inline_data": {"mime_type": self.mime_type, "size": len(self.data)}}


@dataclass(frozen=True)
class FileData:
    """A reference to a file stored elsewhere, addressed by URI."""

    mime_type: str
    file_uri: str

    def to_dict(self) -> Dict[str, Any]:
        return {"file_data": {"mime_type": self.mime_type, "file_uri": self.file_uri}}


Part = Union[Text, Blob, FileData]

PART_TYPES = (Text, Blob, FileData)


def image_data(fmt: str, data: bytes) -> Blob:
    """Create an image :class:`Blob` for input to a model.

    ``fmt`` is the second half of the MIME type, e.g. ``"png"`` for
    ``image/png``.
    """
    return Blob(mime_type="image/" + fmt, data=data)


def coerce_part(value: Union[Part, str]) -> Part:
    """Return ``value`` as a part; plain strings become :class:`Text`."""
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, PART_TYPES):
        return value
    raise TypeError(f"unsupported part type {type(value).__name__}")


__all__ = ["Text", "Blob", "FileData", "Part", "PART_TYPES", "image_data", "coerce_part"]
