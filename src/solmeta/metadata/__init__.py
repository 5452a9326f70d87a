"""Streaming extraction of package metadata fields."""

from .config import ParserSettings, TrackingMode
from .record import MetadataFields, MetadataLoadError, SolMetadata, read_metadata
from .state import ParseState
from .tags import ROOT_TAGS, TAG_TABLE, MetadataTag

__all__ = [
    "MetadataFields",
    "MetadataLoadError",
    "MetadataTag",
    "ParseState",
    "ParserSettings",
    "ROOT_TAGS",
    "SolMetadata",
    "TAG_TABLE",
    "TrackingMode",
    "read_metadata",
]
