"""Small demonstrations of raw, streaming and buffered tag handling."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Callable

from tagstream.processor import ProcessorError, TokenProcessorBuilder
from tagstream.scanner import Tag

Write = Callable[[str], object]

TEXT_NO_TAGS = "This has no tags."
TEXT_THINK = "<think> Thoughts </think> This has tags."
TEXT_TOOL_CALL = "<tool_call>echo hello world</tool_call> This is after."


async def run_simple(write: Write) -> None:
    """Process text with only a raw tokens handler registered."""
    processor = TokenProcessorBuilder(1024).raw_tokens(write).build()
    write("Processing example text 1:\n")
    await processor.process(TEXT_NO_TAGS)
    write("\n\nProcessing example text 2:\n")
    await processor.process(TEXT_THINK)
    await processor.flush()


async def run_streaming_tags(write: Write) -> None:
    """Process text with a streaming handler for ``<think>``."""
    processor = (
        TokenProcessorBuilder(1024)
        .streaming_tag(
            Tag("<think>"),
            lambda: write("[think start] "),
            write,
            lambda: write(" [think end]"),
        )
        .raw_tokens(write)
        .build()
    )
    write("Processing example text 1:\n")
    await processor.process(TEXT_NO_TAGS)
    write("\n\nProcessing example text 2:\n")
    await processor.process(TEXT_THINK)
    await processor.flush()


async def run_buffered_tags(write: Write) -> None:
    """Process text with a buffered handler for ``<tool_call>``."""

    async def on_tool_call(payload: str) -> None:
        write(f"[tool_call buffered]: {payload}\n")

    processor = (
        TokenProcessorBuilder(1024)
        .buffered_tag(Tag("<tool_call>"), on_tool_call)
        .raw_tokens(write)
        .build()
    )
    write("Processing example text 1:\n")
    await processor.process(TEXT_NO_TAGS)
    write("\n\nProcessing example text 2:\n")
    await processor.process(TEXT_TOOL_CALL)
    await processor.flush()


_EXAMPLES = {
    "simple": run_simple,
    "streaming": run_streaming_tags,
    "buffered": run_buffered_tags,
}


def main(argv: list[str] | None = None) -> int:
    """Run one or all demonstrations, writing to standard output."""
    parser = argparse.ArgumentParser(prog="tagstream-demo", description=__doc__)
    parser.add_argument("example", nargs="?", choices=[*_EXAMPLES, "all"], default="all")
    args = parser.parse_args(argv)

    selected = list(_EXAMPLES.values()) if args.example == "all" else [_EXAMPLES[args.example]]
    try:
        for run in selected:
            asyncio.run(run(sys.stdout.write))
            sys.stdout.write("\n")
    except ProcessorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())