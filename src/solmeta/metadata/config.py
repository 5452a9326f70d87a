"""Runtime configuration for the metadata parser."""

from __future__ import annotations

from dataclasses import dataclass
import enum
import os
from typing import Mapping


DEFAULT_READ_SIZE = 64 * 1024

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class TrackingMode(str, enum.Enum):
    """How the parse state remembers which recognized elements are open."""

    STACK = "stack"
    TOGGLE = "toggle"


def _parse_positive_int(*, name: str, raw_value: str | int, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_bool(*, name: str, raw_value: str) -> bool:
    lowered = raw_value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of: {', '.join(sorted(_TRUE_VALUES | _FALSE_VALUES))}")


def _parse_tracking(*, name: str, raw_value: str) -> TrackingMode:
    try:
        return TrackingMode(raw_value.lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in TrackingMode)
        raise ValueError(f"{name} must be one of: {choices}") from exc


@dataclass(frozen=True, slots=True)
class ParserSettings:
    """Validated options for one metadata parse."""

    read_size: int = DEFAULT_READ_SIZE
    tracking: TrackingMode = TrackingMode.STACK
    huge_tree: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.tracking, str):
            raise ValueError(f"tracking must be a TrackingMode, got {self.tracking!r}")
        object.__setattr__(self, "read_size", _parse_positive_int(name="read_size", raw_value=self.read_size))
        object.__setattr__(self, "tracking", _parse_tracking(name="tracking", raw_value=self.tracking))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ParserSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        read_size_raw = source.get("SOLMETA_READ_SIZE", str(DEFAULT_READ_SIZE)).strip()
        tracking_raw = source.get("SOLMETA_TRACKING", TrackingMode.STACK.value).strip()
        huge_tree_raw = source.get("SOLMETA_HUGE_TREE", "false").strip()

        if not read_size_raw:
            raise ValueError("SOLMETA_READ_SIZE cannot be empty")
        if not tracking_raw:
            raise ValueError("SOLMETA_TRACKING cannot be empty")
        if not huge_tree_raw:
            raise ValueError("SOLMETA_HUGE_TREE cannot be empty")

        return cls(
            read_size=_parse_positive_int(name="SOLMETA_READ_SIZE", raw_value=read_size_raw),
            tracking=_parse_tracking(name="SOLMETA_TRACKING", raw_value=tracking_raw),
            huge_tree=_parse_bool(name="SOLMETA_HUGE_TREE", raw_value=huge_tree_raw),
        )
