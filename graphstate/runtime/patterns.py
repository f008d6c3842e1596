"""Compiled event-name patterns.

Event names are dot-segmented (``graph.node.selected``). A pattern segment
``*`` matches exactly one event segment and ``**`` matches whatever remains,
including nothing. Any other segment is a literal. Without ``**`` the pattern
and the name must have the same number of segments.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SEPARATOR = "."
SINGLE = "*"
REST = "**"


class SegmentKind(Enum):
    LITERAL = "literal"
    SINGLE = "single"
    REST = "rest"


@dataclass(frozen=True, slots=True)
class SegmentMatcher:
    kind: SegmentKind
    text: str = ""


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Pattern split once into segment matchers."""

    source: str
    segments: tuple[SegmentMatcher, ...]

    @property
    def is_wildcard(self) -> bool:
        return any(segment.kind is not SegmentKind.LITERAL for segment in self.segments)

    def matches(self, name: str) -> bool:
        return self.matches_segments(name.split(SEPARATOR))

    def matches_segments(self, parts: list[str]) -> bool:
        for index, segment in enumerate(self.segments):
            if segment.kind is SegmentKind.REST:
                return True
            if index >= len(parts):
                return False
            if segment.kind is SegmentKind.SINGLE:
                continue
            if segment.text != parts[index]:
                return False
        return len(self.segments) == len(parts)


def _segment(raw: str) -> SegmentMatcher:
    if raw == REST:
        return SegmentMatcher(SegmentKind.REST)
    if raw == SINGLE:
        return SegmentMatcher(SegmentKind.SINGLE)
    return SegmentMatcher(SegmentKind.LITERAL, raw)


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile pattern text once; no validation is performed."""
    return CompiledPattern(
        source=pattern,
        segments=tuple(_segment(part) for part in str(pattern).split(SEPARATOR)),
    )


def matches(pattern: str, name: str) -> bool:
    """One-shot match helper."""
    return compile_pattern(pattern).matches(name)
