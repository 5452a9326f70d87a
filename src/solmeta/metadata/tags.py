"""Recognized metadata.xml element names and their parse flags."""

from __future__ import annotations

import enum


class MetadataTag(enum.IntFlag):
    """Bit flags for the recognized elements of a package metadata document."""

    NONE = 0
    ROOT = 1 << 1
    PACKAGE = 1 << 2
    HISTORY = 1 << 3
    SOURCE = 1 << 4
    NAME = 1 << 5
    COMPONENT = 1 << 6
    PACKAGER = 1 << 7
    EMAIL = 1 << 8


# Both spellings open the same document root
ROOT_TAGS: tuple[str, ...] = ("PISI", "SOL")

TAG_TABLE: tuple[tuple[str, MetadataTag], ...] = (
    ("Package", MetadataTag.PACKAGE),
    ("History", MetadataTag.HISTORY),
    ("Source", MetadataTag.SOURCE),
    ("Name", MetadataTag.NAME),
    ("PartOf", MetadataTag.COMPONENT),
    ("Packager", MetadataTag.PACKAGER),
    ("Email", MetadataTag.EMAIL),
)

PACKAGE_NAME_FLAGS = MetadataTag.ROOT | MetadataTag.PACKAGE | MetadataTag.NAME


def is_root_tag(name: str) -> bool:
    return name in ROOT_TAGS


def lookup_tag(name: str) -> MetadataTag | None:
    """Return the flag for a child element name, first match wins."""

    for key, flag in TAG_TABLE:
        if key == name:
            return flag
    return None
