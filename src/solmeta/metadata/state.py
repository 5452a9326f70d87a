"""Event-driven parse state for streaming metadata.xml extraction.

`ParseState` implements the lxml parser-target protocol (`start`, `end`,
`data`, `close`), so lxml drives it directly and never builds a tree.

Both element starts and element ends run the same transition: a root
spelling updates the ROOT flag; any other event is ignored until the root is
open, after which the first matching entry of the tag table is updated.
Text is routed by the exact set of open flags at the moment it arrives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from solmeta.metadata.config import TrackingMode
from solmeta.metadata.tags import PACKAGE_NAME_FLAGS, MetadataTag, is_root_tag, lookup_tag

if TYPE_CHECKING:
    from solmeta.metadata.record import SolMetadata


class ParseState:
    """Per-load tracker of open recognized elements bound to one record."""

    def __init__(self, target: SolMetadata, tracking: TrackingMode = TrackingMode.STACK) -> None:
        self._target = target
        self._tracking = TrackingMode(tracking)
        self._flags = MetadataTag.NONE
        self._stack: list[MetadataTag] = []

    @property
    def open_flags(self) -> MetadataTag:
        return self._flags

    @property
    def tracking(self) -> TrackingMode:
        return self._tracking

    def start(self, tag: str, attrib: object = None) -> None:
        flag = self._resolve(tag)
        if flag is None:
            return
        if self._tracking is TrackingMode.TOGGLE:
            self._flags ^= flag
            return
        self._stack.append(flag)
        self._sync_flags()

    def end(self, tag: str) -> None:
        flag = self._resolve(tag)
        if flag is None:
            return
        if self._tracking is TrackingMode.TOGGLE:
            self._flags ^= flag
            return
        # Well-formed input always closes the most recently opened element
        if self._stack and self._stack[-1] == flag:
            self._stack.pop()
            self._sync_flags()

    def data(self, text: str) -> None:
        if self._flags == PACKAGE_NAME_FLAGS:
            self._target._capture_package_name(text)
            return
        if self._flags & MetadataTag.COMPONENT:
            self._target._capture_component(text)

    def close(self) -> SolMetadata:
        return self._target

    def _resolve(self, tag: str) -> MetadataTag | None:
        # lxml reports namespaced elements as {uri}local; match on the local name
        tag = tag.rpartition("}")[2]
        if is_root_tag(tag):
            return MetadataTag.ROOT
        if not self._flags & MetadataTag.ROOT:
            return None
        return lookup_tag(tag)

    def _sync_flags(self) -> None:
        flags = MetadataTag.NONE
        for flag in self._stack:
            flags |= flag
        self._flags = flags
