"""Section header convention used in front of most MAP records."""

from __future__ import annotations

from dataclasses import dataclass

from .reader import ByteReader

__all__ = [
    "SectionHeader",
    "VERSION_MARKER",
    "read_section_header",
    "read_section_header_short",
]

VERSION_MARKER = "Version"


@dataclass(frozen=True, slots=True)
class SectionHeader:
    id: int
    name: str


def read_section_header(reader: ByteReader) -> SectionHeader:
    # The byte size is not used for bounds checks or skipping.
    reader.u32("section size")
    return read_section_header_short(reader)


def read_section_header_short(reader: ByteReader) -> SectionHeader:
    """Read the id and the name, resolving the inline "Version" convention.

    When the name is literally ``Version`` a version number follows and the
    real name (the in-game map texture short name) comes after it.
    """
    ident = reader.u32("section id")
    name = reader.string("section header name")
    if name == VERSION_MARKER:
        reader.u32("version number")
        name = reader.string("texture short name")
    return SectionHeader(ident, name)
