# tagstream

`tagstream` handles model output text chunk by chunk. Callbacks are attached to
XML-style tags such as `<think>` or `<tool_call>`, and a tag split across two
chunks is still recognised.

A processor has three kinds of handler:

- **raw tokens** (required): receives the text outside every registered tag.
- **streaming tags**: three callbacks per tag, one called when the tag opens,
  one called with each run of text inside it, and one called when it closes.
- **buffered tags**: the text inside the tag is collected, and one callback is
  called with the whole payload when the tag closes. The callback may be a
  coroutine function; its result is awaited.

## Installation

```
pip install tagstream
```

## Usage

```python
import asyncio

from tagstream.scanner import Tag
from tagstream.processor import TokenProcessorBuilder


async def on_tool_call(payload: str) -> None:
    print(f"[tool_call buffered]: {payload}")


async def main() -> None:
    processor = (
        TokenProcessorBuilder(1024)
        .streaming_tag(
            Tag("<think>"),
            lambda: print("[think start] ", end=""),
            lambda chunk: print(chunk, end=""),
            lambda: print(" [think end]", end=""),
        )
        .buffered_tag(Tag("<tool_call>"), on_tool_call)
        .raw_tokens(lambda chunk: print(chunk, end=""))
        .build()
    )

    for chunk in ["Hello <thi", "nk> Thoughts </think>", "<tool_call>echo hi</tool_call> bye"]:
        await processor.process(chunk)
    await processor.flush()


asyncio.run(main())
```

`Tag("<name>")` pairs the opening literal with the closing literal `</name>`.

`TokenProcessorBuilder(max_buffer)` sets how many bytes of text may be held
while the scanner waits for a tag to complete; the default is 1024.
`TokenProcessor.process` awaits the handlers for one chunk, and
`TokenProcessor.flush` passes any text still held to the raw tokens handler.

Errors:

- `build()` without a raw tokens handler raises `MissingRawTokensHandlerError`.
- A tag with an empty literal makes `build()` raise `ProcessorError`, chained
  from `InvalidPatternsError`.
- Exceeding the buffer limit makes `process()` raise `ProcessorError`, chained
  from `BufferOverflowError`.

`MissingRawTokensHandlerError` is a subclass of `ProcessorError`; both live in
`tagstream.processor`. `InvalidPatternsError` and `BufferOverflowError` are
subclasses of `ScannerError` in `tagstream.scanner`.

### Using the scanner directly

`Scanner` is the lower-level part underneath. It turns chunks into a list of
`Open`, `Close` and `Raw` events:

```python
from tagstream.scanner import Scanner, Tag

scanner = Scanner([Tag("<think>")], 128)
events = scanner.feed("before <think>inside</think> after")
remaining = scanner.finish()
```

`feed` raises `BufferOverflowError` directly when the limit is exceeded.
`finish` returns any held text as a single `Raw` event, and `reset_buffer`
discards it.

## Demo

The `tagstream-demo` command runs the bundled examples: plain text, a streaming
`<think>` tag and a buffered `<tool_call>` tag. Pass `simple`, `streaming`,
`buffered` or `all` (the default) to choose which to run:

```
tagstream-demo
tagstream-demo streaming
```