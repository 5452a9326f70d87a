"""Package metadata record and the lxml-driven load that fills it."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import BinaryIO, ContextManager, Union

from lxml import etree

from solmeta.metadata.config import ParserSettings
from solmeta.metadata.state import ParseState

logger = logging.getLogger(__name__)

MetadataSource = Union[str, os.PathLike, BinaryIO]


@dataclass(frozen=True, slots=True)
class MetadataFields:
    """Immutable copy of the fields held by a record."""

    package_name: str | None = None
    component: str | None = None


@dataclass(slots=True)
class MetadataLoadError(Exception):
    """Raised by the strict loader when a metadata document cannot be used."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} (path={self.path})"


class SolMetadata:
    """Package name and optional component read from a metadata document.

    A record starts empty. Each `load` replaces whatever the record held
    before; a failed load leaves both fields as None. Records may be shared
    freely once loaded, but `load`, `clear` and `destroy` must not run
    concurrently on the same record.
    """

    def __init__(self) -> None:
        self._package_name: str | None = None
        self._component: str | None = None
        self._destroyed = False

    def __repr__(self) -> str:
        if self._destroyed:
            return "SolMetadata(<destroyed>)"
        return f"SolMetadata(package_name={self._package_name!r}, component={self._component!r})"

    @property
    def package_name(self) -> str | None:
        self._ensure_alive()
        return self._package_name

    @property
    def component(self) -> str | None:
        self._ensure_alive()
        return self._component

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def snapshot(self) -> MetadataFields:
        self._ensure_alive()
        return MetadataFields(package_name=self._package_name, component=self._component)

    def load(self, source: MetadataSource, settings: ParserSettings | None = None) -> bool:
        """Parse `source` into this record and report whether it was well formed."""

        return _parse_into(self, source, settings) is None

    def clear(self) -> None:
        self._package_name = None
        self._component = None

    def destroy(self) -> None:
        """Drop both fields; the record cannot be used afterwards."""

        self.clear()
        self._destroyed = True

    def _capture_package_name(self, text: str) -> None:
        self._package_name = text

    def _capture_component(self, text: str) -> None:
        self._component = text

    def _ensure_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError("Metadata record has been destroyed")


def read_metadata(path: str | Path, settings: ParserSettings | None = None) -> SolMetadata:
    """Load a metadata document into a fresh record or raise MetadataLoadError."""

    source = Path(path)
    record = SolMetadata()
    failure = _parse_into(record, source, settings)
    if failure is not None:
        message, cause = failure
        raise MetadataLoadError(source, message) from cause
    return record


def _describe(source: MetadataSource) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, "name", None) or repr(source)


def _open_source(source: MetadataSource) -> ContextManager[BinaryIO]:
    if hasattr(source, "read"):
        # Caller owns the stream and closes it
        return contextlib.nullcontext(source)
    return open(os.fspath(source), "rb")


def _build_parser(state: ParseState, settings: ParserSettings) -> etree.XMLParser:
    return etree.XMLParser(
        target=state,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=settings.huge_tree,
    )


def _parse_into(
    record: SolMetadata, source: MetadataSource, settings: ParserSettings | None
) -> tuple[str, Exception] | None:
    """Run one load; return None on success or the failure message and its cause."""

    record._ensure_alive()
    settings = settings or ParserSettings()
    record.clear()
    name = _describe(source)

    try:
        stream_context = _open_source(source)
    except OSError as exc:
        logger.error("Error opening metadata source %s: %s", name, exc)
        return f"Failed to open metadata source: {exc}", exc

    with stream_context as stream:
        parser = _build_parser(ParseState(record, settings.tracking), settings)
        try:
            while True:
                chunk = stream.read(settings.read_size)
                if not chunk:
                    break
                parser.feed(chunk)
            parser.close()
        except OSError as exc:
            logger.error("Failed reading metadata source %s: %s", name, exc)
            record.clear()
            return f"Failed to read metadata source: {exc}", exc
        except etree.ParseError as exc:
            logger.error("Badly formed XML file %s, aborting: %s", name, exc)
            record.clear()
            return f"Badly formed XML: {exc}", exc

    logger.debug("Loaded metadata from %s: %r", name, record)
    return None
