"""
Input-type detection: does submitted text look like source code?

Best-effort heuristic, not a classifier. Signatures are tried in order and
the first hit fixes the language; otherwise text counts as code only when it
has code punctuation AND one of a few telltale keywords.
"""

import re
from typing import NamedTuple, Optional

DEFAULT_LANGUAGE = "javascript"

# Order matters: first match wins.
LANGUAGE_SIGNATURES = [
    (re.compile(r"^(import|from|export|const|let|var|function|class)\s+", re.M), "javascript"),
    (re.compile(r"^(def|class|import|from|if __name__|print\()", re.M), "python"),
    (re.compile(r"^(#include|using namespace|int main\(|cout|cin)", re.M), "cpp"),
    (re.compile(r"^(public class|private|public|import java)", re.M), "java"),
    (re.compile(r"^(SELECT|INSERT|UPDATE|DELETE|CREATE TABLE)", re.M | re.I), "sql"),
    (re.compile(r"^(<\?php|\$[a-zA-Z_]|echo|print)", re.M), "php"),
    (re.compile(r'^(package|func|var|import "|type\s+\w+\s+struct)', re.M), "go"),
    (re.compile(r"^(fn|let|mut|use|struct|impl)", re.M), "rust"),
    (re.compile(r"^(<html|<div|<script|<!DOCTYPE)", re.M | re.I), "html"),
    (re.compile(r"^(\.|#|@media|body\s*\{|\.[\w-]+\s*\{)", re.M), "css"),
]

CODE_PUNCTUATION = re.compile(r"[{}();]")
CODE_KEYWORDS = ("function", "class", "const", "def", "public", "private")


class InputDetection(NamedTuple):
    is_code: bool
    language: Optional[str]


def detect_input_type(text: str) -> InputDetection:
    """Guess whether `text` is source code and, if so, which language."""
    for pattern, language in LANGUAGE_SIGNATURES:
        if pattern.search(text):
            return InputDetection(True, language)

    has_code_structure = bool(CODE_PUNCTUATION.search(text)) and any(
        keyword in text for keyword in CODE_KEYWORDS
    )
    return InputDetection(has_code_structure, DEFAULT_LANGUAGE)
