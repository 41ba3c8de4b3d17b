import pytest

from tagstream.scanner import (
    BufferOverflowError,
    Close,
    InvalidPatternsError,
    Open,
    Raw,
    Scanner,
    ScannerError,
    Tag,
)


def test_scanner_emits_expected_events():
    tag = Tag("<think>")
    scanner = Scanner([tag], 128)
    text = "Text before tags <think>text inside of tags</think> then text after tags."
    events = scanner.feed(text)
    assert events == [
        Raw("Text before tags "),
        Open(tag),
        Raw("text inside of tags"),
        Close(tag),
        Raw(" then text after tags."),
    ]
    assert scanner.finish() == []


def test_tag_derives_name_and_close():
    tag = Tag("<tool_call>")
    assert tag.name == "tool_call"
    assert tag.open == "<tool_call>"
    assert tag.close == "</tool_call>"
    assert str(tag) == "<tool_call>"


def test_tags_compare_by_value():
    assert Tag("<think>") == Tag("<think>")
    assert Tag("<think>") != Tag("<tool_call>")
    assert len({Tag("<think>"), Tag("<think>")}) == 1


def test_plain_text_passes_through():
    scanner = Scanner([Tag("<think>")], 128)
    assert scanner.feed("no tags here") == [Raw("no tags here")]


def test_empty_chunk_yields_nothing():
    scanner = Scanner([Tag("<think>")], 128)
    assert scanner.feed("") == []


def test_tag_split_across_chunks():
    tag = Tag("<think>")
    scanner = Scanner([tag], 128)
    assert scanner.feed("a <thi") == []
    assert scanner.feed("nk>hi</think>") == [Raw("a "), Open(tag), Raw("hi"), Close(tag)]


def test_finish_flushes_buffered_text():
    scanner = Scanner([Tag("<think>")], 128)
    assert scanner.feed("partial <th") == []
    assert scanner.finish() == [Raw("partial <th")]
    assert scanner.finish() == []


def test_reset_buffer_discards_text():
    scanner = Scanner([Tag("<think>")], 128)
    scanner.feed("x <th")
    scanner.reset_buffer()
    assert scanner.finish() == []


def test_without_tags_text_with_angle_bracket_is_held():
    scanner = Scanner([], 128)
    text = "<think> Thoughts </think> This has tags."
    assert scanner.feed(text) == []
    assert scanner.finish() == [Raw(text)]


def test_overflow_on_plain_chunk():
    scanner = Scanner([Tag("<a>")], 4)
    with pytest.raises(BufferOverflowError) as info:
        scanner.feed("hello")
    assert info.value.max_buffer == 4
    assert isinstance(info.value, ScannerError)


def test_overflow_counts_bytes():
    scanner = Scanner([Tag("<a>")], 5)
    with pytest.raises(BufferOverflowError):
        scanner.feed("\u00e9\u00e9\u00e9")


def test_overflow_when_buffer_grows():
    scanner = Scanner([Tag("<think>")], 10)
    assert scanner.feed("<thi") == []
    with pytest.raises(BufferOverflowError):
        scanner.feed("<think>toolong")


def test_inside_tag_chunk_without_bracket_emitted_directly():
    tag = Tag("<think>")
    scanner = Scanner([tag], 128)
    assert scanner.feed("<think>") == [Open(tag)]
    assert scanner.feed("inner") == [Raw("inner")]
    assert scanner.feed("</think>") == [Close(tag)]


def test_multiple_tags():
    think = Tag("<think>")
    call = Tag("<call>")
    scanner = Scanner([think, call], 128)
    events = scanner.feed("<call>x</call><think>y</think>")
    assert events == [Open(call), Raw("x"), Close(call), Open(think), Raw("y"), Close(think)]


def test_empty_open_literal_rejected():
    with pytest.raises(InvalidPatternsError):
        Scanner([Tag("")], 128)