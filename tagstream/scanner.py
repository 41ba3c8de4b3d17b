"""Streaming scanner that splits text into raw runs and tag open/close events."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Union


class Tag:
    """A pair of opening and closing tag literals, e.g. ``<think>`` / ``</think>``."""

    __slots__ = ("name", "open", "close")

    def __init__(self, open: str) -> None:
        name = open.lstrip("<").rstrip(">")
        self.name = name
        self.open = open
        self.close = f"</{name}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return (self.name, self.open, self.close) == (other.name, other.open, other.close)

    def __hash__(self) -> int:
        return hash((self.name, self.open, self.close))

    def __repr__(self) -> str:
        return f"Tag({self.open!r})"

    def __str__(self) -> str:
        return self.open


@dataclass(frozen=True)
class Open:
    """A registered tag was opened."""

    tag: Tag


@dataclass(frozen=True)
class Close:
    """A registered tag was closed."""

    tag: Tag


@dataclass(frozen=True)
class Raw:
    """A run of text that is not a tag literal."""

    text: str


Event = Union[Open, Close, Raw]


class ScannerError(Exception):
    """Base class for scanner failures."""


class InvalidPatternsError(ScannerError):
    """The tag literals cannot be used as search patterns."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid patterns: {reason}")
        self.reason = reason


class BufferOverflowError(ScannerError):
    """More text was buffered than the configured limit allows."""

    def __init__(self, max_buffer: int) -> None:
        super().__init__(f"buffer overflow: no closing tag within {max_buffer} bytes")
        self.max_buffer = max_buffer


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


class Scanner:
    """Finds tag literals in a stream of text chunks, including across chunk boundaries.

    Patterns are matched leftmost-first: at the earliest position where any
    literal matches, the literal registered first wins.
    """

    def __init__(self, tags: Iterable[Tag], max_buffer: int) -> None:
        self._tags = list(tags)
        patterns = [literal for tag in self._tags for literal in (tag.open, tag.close)]
        if any(not literal for literal in patterns):
            raise InvalidPatternsError("empty tag literals are not supported")
        self._regex = (
            re.compile("|".join(f"({re.escape(literal)})" for literal in patterns))
            if patterns
            else None
        )
        self.max_buffer = max_buffer
        self._buf = ""
        self._pending = 0

    def _matches(self, text: str) -> Iterator[re.Match[str]]:
        if self._regex is not None:
            yield from self._regex.finditer(text)

    def feed(self, chunk: str) -> list[Event]:
        """Scan a chunk and return the events it completes.

        Raises BufferOverflowError when more than ``max_buffer`` bytes would be held.
        """
        if self._pending > 0 and "<" not in chunk:
            # Inside a tag, a chunk without '<' cannot open or close anything.
            if _byte_len(chunk) > self.max_buffer:
                raise BufferOverflowError(self.max_buffer)
            return [Raw(chunk)]

        if not self._buf and "<" not in chunk and self._pending == 0:
            if _byte_len(chunk) > self.max_buffer:
                raise BufferOverflowError(self.max_buffer)
            return [Raw(chunk)] if chunk else []

        self._buf += chunk
        if _byte_len(self._buf) > self.max_buffer:
            raise BufferOverflowError(self.max_buffer)

        events: list[Event] = []
        last_end = 0
        for match in self._matches(self._buf):
            start, end = match.span()
            if start > last_end:
                events.append(Raw(self._buf[last_end:start]))
            pattern_id = match.lastindex - 1
            tag = self._tags[pattern_id // 2]
            if pattern_id % 2 == 0:
                events.append(Open(tag))
                self._pending += 1
            else:
                events.append(Close(tag))
                self._pending = max(0, self._pending - 1)
            last_end = end

        suffix = self._buf[last_end:]
        if suffix and self._pending == 0 and "<" not in suffix:
            events.append(Raw(suffix))
            self._buf = ""
        else:
            self._buf = suffix
        return events

    def finish(self) -> list[Event]:
        """Return any buffered text as a single raw event and empty the buffer."""
        if not self._buf:
            return []
        remainder, self._buf = self._buf, ""
        return [Raw(remainder)]

    def reset_buffer(self) -> None:
        """Discard any buffered text."""
        self._buf = ""