"""Package metadata.xml reader."""

from solmeta.metadata import (
    MetadataFields,
    MetadataLoadError,
    MetadataTag,
    ParserSettings,
    SolMetadata,
    TrackingMode,
    read_metadata,
)

__all__ = [
    "MetadataFields",
    "MetadataLoadError",
    "MetadataTag",
    "ParserSettings",
    "SolMetadata",
    "TrackingMode",
    "read_metadata",
]
