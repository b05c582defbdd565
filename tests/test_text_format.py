from UFOArray.core.codec import IntCodec, StrCodec
from UFOArray.core.text_format import ParsedEntry, parse_lines, render_block


def test_render_single_entry_has_no_comma():
    assert render_block("One", {"k": "v"}, StrCodec()) == '(One)\n{\n\t"k": v\n}'


def test_render_sorts_keys():
    text = render_block("N", {"b": 2, "a": 1}, IntCodec())
    assert text == '(N)\n{\n\t"a": 1,\n\t"b": 2\n}'


def test_parse_strips_entry_separator():
    lines = ["(S)\n", "{\n", '\t"a": first,\n', '\t"b": second\n', "}\n"]
    entries = list(parse_lines(lines, StrCodec()))

    assert entries == [
        ParsedEntry(category="S", key="a", value="first"),
        ParsedEntry(category="S", key="b", value="second"),
    ]


def test_parse_keeps_colons_inside_values():
    entries = list(parse_lines(["(T)", '\t"time": 12:30'], StrCodec()))

    assert entries == [ParsedEntry(category="T", key="time", value="12:30")]


def test_parse_handles_keys_of_any_length():
    entries = list(parse_lines(["(K)", '\t"": 1,', '\t"a much longer key": 2'], IntCodec()))

    assert [(e.key, e.value) for e in entries] == [("", 1), ("a much longer key", 2)]


def test_header_stays_active_until_next_header():
    lines = ["(A)", '\t"x": 1', "}", "", '\t"y": 2', "(B)", '\t"z": 3']
    entries = list(parse_lines(lines, IntCodec()))

    assert [(e.category, e.key) for e in entries] == [("A", "x"), ("A", "y"), ("B", "z")]


def test_parse_accepts_crlf_line_endings():
    entries = list(parse_lines(["(W)\r\n", '\t"k": 5\r\n'], IntCodec()))

    assert entries == [ParsedEntry(category="W", key="k", value=5)]


def test_entry_without_value_is_skipped():
    assert list(parse_lines(["(E)", '\t"k": '], StrCodec())) == []
