"""
Task Evaluator Backend — Response Parser
=========================================

What:  Turns the model's free-text reply into an AnalysisResult.
How:   Line scanning plus a handful of regular expressions, following the
       reply layout pinned by taskeval.analysis.prompts.
Who:   Called by AnalysisService once per /api/analyze request.

Algorithm (shared by the text and code variants):
    1. Split the reply into non-empty, trimmed lines.
    2. Score: per line, try `SCORE: N`, `Score: N`, `N/M`, `N out of M`;
       the first pattern that matches a line sets the running score to
       min(round(N), max_score). Scanning stops at the first nonzero score.
       A final value of 0 is indistinguishable from "no score token", and
       both resolve to DEFAULT_SCORE (clamped to max_score).
    3. Category: first line starting with `category:`.
    4. Feedback: from `feedback:` up to the next section marker.
    5. Strengths / improvements: bullet lines (`-`, `•`, `N.`) after the
       marker, up to the next section marker.
    6. Code variant only: fenced blocks after CORRECTED_CODE / OPTIMIZED_CODE
       and pipe-delimited CODE_ISSUES bullets.
    7. Empty lists and feedback fall back to per-variant placeholders.

Failure contract:
    Parsing never raises. Any exception during steps 1-6 is logged and the
    reply is reduced to a fallback result: the first number found (clamped),
    or DEFAULT_SCORE, with feedback stating that parsing encountered issues.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from taskeval.schemas.analysis import (
    ISSUE_TYPES,
    SEVERITIES,
    AnalysisResult,
    CodeIssue,
)

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 50

SCORE_PATTERNS = [
    re.compile(r"SCORE:\s*(\d+(?:\.\d+)?)", re.I),
    re.compile(r"Score:\s*(\d+(?:\.\d+)?)", re.I),
    re.compile(r"(\d+(?:\.\d+)?)/\d+"),
    re.compile(r"(\d+(?:\.\d+)?)\s*(?:out of|/)\s*\d+", re.I),
]
FALLBACK_SCORE_PATTERN = re.compile(r"(\d+)(?:\s*/\s*\d+|\s*out\s*of\s*\d+|\s*points?)?", re.I)

BULLET_LINE = re.compile(r"^(?:[-•]|\d+\.)")
BULLET_MARKER = re.compile(r"^(?:[-•]|\d+\.)\s*")

CORRECTED_CODE_BLOCK = re.compile(r"CORRECTED_CODE:\s*```[\w+#.-]*[ \t]*\n(.*?)```", re.I | re.S)
OPTIMIZED_CODE_BLOCK = re.compile(r"OPTIMIZED_CODE:\s*```[\w+#.-]*[ \t]*\n(.*?)```", re.I | re.S)

CODE_ISSUE_LINE = re.compile(
    r"TYPE:\s*(\w+)\s*\|\s*SEVERITY:\s*(\w+)"
    r"(?:\s*\|\s*LINE:\s*([^|]*?))?"
    r"\s*\|\s*DESCRIPTION:\s*([^|]+?)\s*\|\s*SUGGESTION:\s*(.+)",
    re.I,
)
ASCII_DIGITS = re.compile(r"[0-9]+")

TEXT_SECTIONS = ("score:", "category:", "feedback:", "strengths:", "improvements:")
CODE_SECTIONS = TEXT_SECTIONS + ("corrected_code:", "optimized_code:", "code_issues:")


@dataclass(frozen=True)
class _Placeholders:
    feedback: str
    strengths: str
    improvements: str
    fallback_feedback: str
    fallback_strengths: str
    fallback_improvements: str


TEXT_PLACEHOLDERS = _Placeholders(
    feedback="Analysis completed successfully",
    strengths="Text structure is present",
    improvements="Consider reviewing for clarity",
    fallback_feedback=(
        "Analysis completed but parsing encountered issues. "
        "Please check the raw response for details."
    ),
    fallback_strengths="Content provided for analysis",
    fallback_improvements="Consider simplifying the analysis request",
)

CODE_PLACEHOLDERS = _Placeholders(
    feedback="Code analysis completed successfully",
    strengths="Code structure is present",
    improvements="Consider reviewing for best practices",
    fallback_feedback="Code analysis completed but parsing encountered issues.",
    fallback_strengths="Code provided for analysis",
    fallback_improvements="Consider simplifying the code structure",
)


# ══════════════════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════════════════


def parse_text_analysis(reply: str, max_score: int) -> AnalysisResult:
    """Parse a reply to the prose-evaluation prompt."""
    try:
        return _parse(reply, max_score, TEXT_SECTIONS, TEXT_PLACEHOLDERS, code=False)
    except Exception:
        logger.exception("Failed to parse analysis response")
        return _fallback(reply, max_score, TEXT_PLACEHOLDERS)


def parse_code_analysis(reply: str, max_score: int) -> AnalysisResult:
    """Parse a reply to the code-review prompt, including code blocks and issues."""
    try:
        return _parse(reply, max_score, CODE_SECTIONS, CODE_PLACEHOLDERS, code=True)
    except Exception:
        logger.exception("Failed to parse code analysis response")
        return _fallback(reply, max_score, CODE_PLACEHOLDERS)


# ══════════════════════════════════════════════════════════════════════════
# Scanning helpers
# ══════════════════════════════════════════════════════════════════════════


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: int, max_score: int) -> int:
    return max(0, min(value, max_score))


def extract_score(lines: Sequence[str], max_score: int) -> int:
    """
    Scan lines for a score token and clamp it to [0, max_score].

    Returns DEFAULT_SCORE (clamped) when the scan ends at 0.
    """
    score = 0
    for line in lines:
        for pattern in SCORE_PATTERNS:
            match = pattern.search(line)
            if match:
                score = _clamp(_round_half_up(float(match.group(1))), max_score)
                break
        if score > 0:
            break
    if score == 0:
        return _clamp(DEFAULT_SCORE, max_score)
    return score


def _starts_with_any(line: str, markers: Sequence[str]) -> bool:
    return line.lower().startswith(tuple(markers))


def _find_marker(lines: Sequence[str], marker: str) -> int:
    for index, line in enumerate(lines):
        if line.lower().startswith(marker):
            return index
    return -1


def _strip_prefix(line: str, marker: str) -> str:
    return re.sub(rf"^{re.escape(marker)}\s*", "", line, count=1, flags=re.I).strip()


def extract_category(lines: Sequence[str]) -> Optional[str]:
    index = _find_marker(lines, "category:")
    if index == -1:
        return None
    return _strip_prefix(lines[index], "category:") or None


def extract_feedback(lines: Sequence[str], sections: Sequence[str]) -> str:
    index = _find_marker(lines, "feedback:")
    if index == -1:
        return ""
    collected = []
    first = _strip_prefix(lines[index], "feedback:")
    if first:
        collected.append(first)
    for line in lines[index + 1:]:
        if _starts_with_any(line, sections):
            break
        collected.append(line)
    return " ".join(collected).strip()


def extract_bullets(lines: Sequence[str], marker: str, sections: Sequence[str]) -> List[str]:
    """Collect bullet items listed under `marker`, stopping at the next section."""
    index = _find_marker(lines, marker)
    if index == -1:
        return []
    items = []
    for line in lines[index + 1:]:
        if _starts_with_any(line, sections):
            break
        if BULLET_LINE.match(line):
            item = BULLET_MARKER.sub("", line, count=1).strip()
            if item:
                items.append(item)
    return items


def extract_code_block(reply: str, pattern: "re.Pattern[str]") -> Optional[str]:
    match = pattern.search(reply)
    if not match:
        return None
    return match.group(1).strip() or None


def extract_code_issues(lines: Sequence[str]) -> List[CodeIssue]:
    """Read CODE_ISSUES bullets; lines not matching the five-field layout are dropped."""
    index = _find_marker(lines, "code_issues:")
    if index == -1:
        return []
    issues = []
    for line in lines[index + 1:]:
        if not line.startswith(("-", "•")):
            continue
        match = CODE_ISSUE_LINE.search(line)
        if not match:
            continue
        issue_type = match.group(1).lower()
        severity = match.group(2).lower()
        if issue_type not in ISSUE_TYPES or severity not in SEVERITIES:
            continue
        raw_line = (match.group(3) or "").strip()
        issues.append(
            CodeIssue(
                type=issue_type,
                severity=severity,
                line=int(raw_line) if ASCII_DIGITS.fullmatch(raw_line) else None,
                description=match.group(4).strip(),
                suggestion=match.group(5).strip(),
            )
        )
    return issues


# ══════════════════════════════════════════════════════════════════════════
# Assembly
# ══════════════════════════════════════════════════════════════════════════


def _parse(
    reply: str,
    max_score: int,
    sections: Sequence[str],
    placeholders: _Placeholders,
    code: bool,
) -> AnalysisResult:
    logger.debug("Raw AI response: %s", reply)
    lines = [line.strip() for line in reply.split("\n") if line.strip()]

    result = AnalysisResult(
        score=extract_score(lines, max_score),
        category=extract_category(lines),
        feedback=extract_feedback(lines, sections) or placeholders.feedback,
        strengths=extract_bullets(lines, "strengths:", sections) or [placeholders.strengths],
        improvements=(
            extract_bullets(lines, "improvements:", sections) or [placeholders.improvements]
        ),
    )

    if code:
        result.corrected_code = extract_code_block(reply, CORRECTED_CODE_BLOCK)
        result.optimized_code = extract_code_block(reply, OPTIMIZED_CODE_BLOCK)
        result.code_issues = extract_code_issues(lines) or None

    logger.debug("Parsed result: %s", result)
    return result


def _fallback(reply: str, max_score: int, placeholders: _Placeholders) -> AnalysisResult:
    score = DEFAULT_SCORE
    match = FALLBACK_SCORE_PATTERN.search(reply) if isinstance(reply, str) else None
    if match:
        score = int(match.group(1))
    return AnalysisResult(
        score=_clamp(score, max_score),
        feedback=placeholders.fallback_feedback,
        strengths=[placeholders.fallback_strengths],
        improvements=[placeholders.fallback_improvements],
    )
