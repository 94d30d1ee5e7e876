from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CodecError(Exception):
    """Base error for attribute value conversion.

    `path` is the dotted field path inside the record being converted
    (e.g. ``profile.age`` or ``scores[2]``), empty for a top-level value.
    """

    message: str
    path: str = ""
    cause: Exception | None = None

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} (at {self.path})"
        return self.message


@dataclass(slots=True)
class NumberDecodeError(CodecError):
    text: str | None = None


@dataclass(slots=True)
class WireFormatError(CodecError):
    pass


@dataclass(slots=True)
class SchemaError(CodecError):
    pass
