from __future__ import annotations

import pytest

from termedit.syntax import TokenClass, clip_tokens, tokenize


def kinds(line: str) -> list[tuple[str, TokenClass]]:
    return [(token.text, token.kind) for token in tokenize(line)]


def test_tokenize_classifies_each_lexical_class() -> None:
    assert kinds('let n: u32 = 42; // answer') == [
        ("let", TokenClass.KEYWORD),
        (" ", TokenClass.PLAIN),
        ("n", TokenClass.PLAIN),
        (":", TokenClass.PLAIN),
        (" ", TokenClass.PLAIN),
        ("u32", TokenClass.TYPE),
        (" ", TokenClass.PLAIN),
        ("=", TokenClass.PLAIN),
        (" ", TokenClass.PLAIN),
        ("42", TokenClass.NUMBER),
        (";", TokenClass.PLAIN),
        (" ", TokenClass.PLAIN),
        ("// answer", TokenClass.COMMENT),
    ]


def test_tokenize_string_runs_through_closing_quote() -> None:
    assert kinds('x "a // b" y') == [
        ("x", TokenClass.PLAIN),
        (" ", TokenClass.PLAIN),
        ('"a // b"', TokenClass.STRING),
        (" ", TokenClass.PLAIN),
        ("y", TokenClass.PLAIN),
    ]


def test_tokenize_unterminated_string_consumes_rest_of_line() -> None:
    assert kinds('print("oops') == [
        ("print", TokenClass.PLAIN),
        ("(", TokenClass.PLAIN),
        ('"oops', TokenClass.STRING),
    ]


def test_tokenize_digits_before_word_split_into_number() -> None:
    assert kinds("9lives x9") == [
        ("9", TokenClass.NUMBER),
        ("lives", TokenClass.PLAIN),
        (" ", TokenClass.PLAIN),
        ("x9", TokenClass.PLAIN),
    ]


def test_tokenize_single_slash_is_plain() -> None:
    assert kinds("a/b") == [
        ("a", TokenClass.PLAIN),
        ("/", TokenClass.PLAIN),
        ("b", TokenClass.PLAIN),
    ]


def test_tokenize_empty_line() -> None:
    assert tokenize("") == ()


@pytest.mark.parametrize(
    "line",
    [
        "fn main() { println!(\"hi\"); }",
        "    // indented comment",
        "äöü_ident 12ab \"unterminated",
        "\t\"\"\"//",
    ],
)
def test_tokenize_covers_line_without_gaps(line: str) -> None:
    tokens = tokenize(line)

    assert "".join(token.text for token in tokens) == line
    for previous, current in zip(tokens, tokens[1:]):
        assert previous.end == current.start


def test_clip_tokens_cuts_window_and_keeps_kinds() -> None:
    tokens = tokenize("let value = 10")

    clipped = clip_tokens(tokens, 2, 6)

    assert "".join(token.text for token in clipped) == "t valu"
    assert clipped[0].kind is TokenClass.KEYWORD
    assert clipped[0].start == 2


def test_clip_tokens_past_end_is_empty() -> None:
    assert clip_tokens(tokenize("short"), 10, 5) == ()
    assert clip_tokens(tokenize("short"), 0, 0) == ()
