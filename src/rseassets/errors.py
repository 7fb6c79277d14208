"""Error definitions for rseassets.

Every decode failure is a ``DecodeError`` carrying a code, a message and an
ordered list of location frames. Frames are pushed by
``ByteReader.label`` while the error travels outward, so ``frames[0]`` is the
outermost step and the message describes the primitive read that failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

E_MAGIC_MISMATCH = "E_MAGIC_MISMATCH"
E_UNSUPPORTED_VERSION = "E_UNSUPPORTED_VERSION"
E_UNSUPPORTED_PALETTE = "E_UNSUPPORTED_PALETTE"
E_UNKNOWN_DISCRIMINATOR = "E_UNKNOWN_DISCRIMINATOR"
E_TRUNCATED = "E_TRUNCATED"
E_EMPTY_STRING = "E_EMPTY_STRING"
E_MISSING_TERMINATOR = "E_MISSING_TERMINATOR"
E_FILE_IO = "E_FILE_IO"


@dataclass(eq=False)
class DecodeError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None
    frames: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def push(self, label: str) -> None:
        self.frames.insert(0, label)

    def attach_path(self, path: str | Path) -> None:
        if self.context is None:
            self.context = {}
        self.context["path"] = str(path)

    @property
    def path(self) -> Optional[str]:
        return (self.context or {}).get("path")

    def chain(self) -> List[str]:
        """Frames from the top-level call down, then the failing cause."""
        return [*self.frames, self.message]

    def format_chain(self, sep: str = " > ") -> str:
        return sep.join(self.chain())

    def __str__(self) -> str:
        return f"{self.code}: {self.format_chain()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "frames": list(self.frames),
            "context": self.context or {},
        }


class MagicMismatch(DecodeError):
    pass


class UnsupportedVersion(DecodeError):
    pass


class UnsupportedPaletteValue(DecodeError):
    pass


class UnknownDiscriminator(DecodeError):
    pass


class TruncatedInput(DecodeError):
    pass


class EmptyString(DecodeError):
    pass


class MissingTerminator(DecodeError):
    pass


@dataclass(eq=False)
class FileReadError(Exception):
    path: str
    message: str
    code: str = E_FILE_IO

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.code}: {self.path}: {self.message}"


def magic_mismatch(observed: bytes, expected: bytes) -> MagicMismatch:
    return MagicMismatch(
        code=E_MAGIC_MISMATCH,
        message=f"incorrect magic: {observed!r} (expected {expected!r})",
        context={"observed": observed.hex(), "expected": expected.hex()},
    )


def unsupported_version(version: int) -> UnsupportedVersion:
    return UnsupportedVersion(
        code=E_UNSUPPORTED_VERSION,
        message=f"RSB version {version} not supported",
        context={"version": version},
    )


def unsupported_palette(value: int) -> UnsupportedPaletteValue:
    return UnsupportedPaletteValue(
        code=E_UNSUPPORTED_PALETTE,
        message=f"palette {value} is unhandled",
        context={"palette": value},
    )


def unknown_discriminator(what: str, value: int) -> UnknownDiscriminator:
    return UnknownDiscriminator(
        code=E_UNKNOWN_DISCRIMINATOR,
        message=f"unhandled {what} value: {value}",
        context={"value": value},
    )


def truncated(wanted: int, offset: int, available: int) -> TruncatedInput:
    return TruncatedInput(
        code=E_TRUNCATED,
        message=(
            f"could not read {wanted} bytes at offset {offset} "
            f"({available} remaining)"
        ),
        context={"offset": offset, "wanted": wanted, "available": available},
    )


def empty_string(offset: int) -> EmptyString:
    return EmptyString(
        code=E_EMPTY_STRING,
        message="empty string",
        context={"offset": offset},
    )


def missing_terminator(observed: bytes, expected: bytes) -> MissingTerminator:
    return MissingTerminator(
        code=E_MISSING_TERMINATOR,
        message=f"missing MAP end: found {observed!r}, expected {expected!r}",
        context={"observed": observed.hex()},
    )


__all__ = [
    "DecodeError",
    "MagicMismatch",
    "UnsupportedVersion",
    "UnsupportedPaletteValue",
    "UnknownDiscriminator",
    "TruncatedInput",
    "EmptyString",
    "MissingTerminator",
    "FileReadError",
    "magic_mismatch",
    "unsupported_version",
    "unsupported_palette",
    "unknown_discriminator",
    "truncated",
    "empty_string",
    "missing_terminator",
    "E_MAGIC_MISMATCH",
    "E_UNSUPPORTED_VERSION",
    "E_UNSUPPORTED_PALETTE",
    "E_UNKNOWN_DISCRIMINATOR",
    "E_TRUNCATED",
    "E_EMPTY_STRING",
    "E_MISSING_TERMINATOR",
    "E_FILE_IO",
]
