"""Tests for the code-vs-prose heuristic."""

import pytest

from taskeval.analysis.detector import detect_input_type


@pytest.mark.parametrize(
    "text, language",
    [
        ("def add(a, b):\n    return a + b", "python"),
        ("#include <stdio.h>\nint main() { return 0; }", "cpp"),
        ("SELECT * FROM users WHERE id = 1;", "sql"),
        ("select name from accounts", "sql"),
        ("<!DOCTYPE html>\n<html></html>", "html"),
        ("package main\n\nfunc main() {}", "go"),
    ],
)
def test_language_signatures(text, language):
    assert detect_input_type(text) == (True, language)


def test_first_matching_signature_wins():
    # `import` is a javascript signature too, and javascript is checked first
    assert detect_input_type("import os\nprint(os.getcwd())").language == "javascript"


def test_plain_prose_is_not_code():
    assert detect_input_type("The quick brown fox jumps over the lazy dog.").is_code is False


def test_punctuation_and_keyword_fallback():
    detection = detect_input_type("x = compute(); // function helper")
    assert detection.is_code is True
    assert detection.language == "javascript"


def test_punctuation_alone_is_not_code():
    assert detect_input_type("Call me (maybe); thanks.").is_code is False
