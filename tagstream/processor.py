"""Dispatches scanner events to raw-text, streaming-tag and buffered-tag handlers."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Union

from tagstream.scanner import Close, Open, Raw, Scanner, ScannerError, Tag


class ProcessorError(Exception):
    """Base class for processor failures; scanner failures are chained as the cause."""


class MissingRawTokensHandlerError(ProcessorError):
    """No handler for raw text was registered."""

    def __init__(self) -> None:
        super().__init__("Mandatory raw tokens handler was not provided.")


@dataclass
class _StreamingHandler:
    tag: Tag
    on_open: Callable[[], Any]
    on_data: Callable[[str], Any]
    on_close: Callable[[], Any]


@dataclass
class _BufferedHandler:
    tag: Tag
    on_close: Callable[[str], Union[Awaitable[Any], Any]]


_Handler = Union[_StreamingHandler, _BufferedHandler]


@dataclass
class _ActiveBuffer:
    index: int
    parts: list[str] = field(default_factory=list)


class TokenProcessorBuilder:
    """Collects handler registrations and builds a TokenProcessor."""

    def __init__(self, max_buffer: int = 1024) -> None:
        self.max_buffer = max_buffer
        self._handlers: list[_Handler] = []
        self._on_raw_tokens: Callable[[str], Any] | None = None

    def streaming_tag(
        self,
        tag: Tag,
        on_open: Callable[[], Any],
        on_data: Callable[[str], Any],
        on_close: Callable[[], Any],
    ) -> "TokenProcessorBuilder":
        """Register callbacks run on open, for each inside chunk, and on close of ``tag``."""
        self._handlers.append(_StreamingHandler(tag, on_open, on_data, on_close))
        return self

    def buffered_tag(
        self, tag: Tag, on_close: Callable[[str], Union[Awaitable[Any], Any]]
    ) -> "TokenProcessorBuilder":
        """Register a callback given the whole text inside ``tag`` when it closes.

        The callback may be a coroutine function; its result is awaited.
        """
        self._handlers.append(_BufferedHandler(tag, on_close))
        return self

    def raw_tokens(self, handler: Callable[[str], Any]) -> "TokenProcessorBuilder":
        """Set the mandatory handler for text outside any registered tag."""
        self._on_raw_tokens = handler
        return self

    def build(self) -> "TokenProcessor":
        """Create the processor; raises ProcessorError on bad configuration."""
        try:
            scanner = Scanner([h.tag for h in self._handlers], self.max_buffer)
        except ScannerError as exc:
            raise ProcessorError(f"Scanner error: {exc}") from exc
        if self._on_raw_tokens is None:
            raise MissingRawTokensHandlerError()
        return TokenProcessor(scanner, list(self._handlers), self._on_raw_tokens)


class TokenProcessor:
    """Feeds chunks to a scanner and dispatches the resulting events.

    Create instances with TokenProcessorBuilder.
    """

    def __init__(
        self,
        scanner: Scanner,
        handlers: list[_Handler],
        on_raw_tokens: Callable[[str], Any],
    ) -> None:
        self._scanner = scanner
        self._handlers = handlers
        self._on_raw_tokens = on_raw_tokens
        self._active_streaming: list[int] = []
        self._active_buffered: _ActiveBuffer | None = None

    def _find(self, tag: Tag) -> tuple[int, _Handler] | None:
        return next(
            ((index, h) for index, h in enumerate(self._handlers) if h.tag == tag), None
        )

    async def process(self, chunk: str) -> None:
        """Scan ``chunk`` and call the registered handlers for each event."""
        try:
            events = self._scanner.feed(chunk)
        except ScannerError as exc:
            raise ProcessorError(f"Scanner error: {exc}") from exc

        for event in events:
            if isinstance(event, Raw):
                if self._active_buffered is not None:
                    self._active_buffered.parts.append(event.text)
                for index in self._active_streaming:
                    handler = self._handlers[index]
                    if isinstance(handler, _StreamingHandler):
                        handler.on_data(event.text)
                if not self._active_streaming and self._active_buffered is None:
                    self._on_raw_tokens(event.text)

            elif isinstance(event, Open):
                found = self._find(event.tag)
                if found is None:
                    continue
                index, handler = found
                if isinstance(handler, _StreamingHandler):
                    handler.on_open()
                    self._active_streaming.append(index)
                else:
                    self._active_buffered = _ActiveBuffer(index)

            elif isinstance(event, Close):
                found = self._find(event.tag)
                if found is None:
                    continue
                index, handler = found
                if isinstance(handler, _StreamingHandler):
                    handler.on_close()
                    self._active_streaming = [i for i in self._active_streaming if i != index]
                elif self._active_buffered is not None:
                    payload = "".join(self._active_buffered.parts)
                    self._active_buffered = None
                    result = handler.on_close(payload)
                    if inspect.isawaitable(result):
                        await result

    async def flush(self) -> None:
        """Send any text still held by the scanner to the raw tokens handler."""
        for event in self._scanner.finish():
            if isinstance(event, Raw):
                self._on_raw_tokens(event.text)