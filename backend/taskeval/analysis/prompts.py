"""
Prompt templates handed verbatim to the generative model.

Every builder is a pure function of its arguments. The reply layout the
prompts pin down (SCORE / CATEGORY / FEEDBACK / STRENGTHS / IMPROVEMENTS and,
for code, CORRECTED_CODE / OPTIMIZED_CODE / CODE_ISSUES) is exactly what
taskeval.analysis.parser knows how to read back.
"""

from typing import Optional, Sequence

CRITERIA_INSTRUCTIONS = {
    "writing": "clarity, grammar, style, structure, and engagement",
    "academic": "argument strength, evidence quality, structure, clarity, and academic rigor",
    "business": "professionalism, clarity, persuasiveness, structure, and actionability",
    "creative": "originality, creativity, engagement, style, and emotional impact",
    "general": "overall quality, clarity, structure, and effectiveness",
}

ANALYSIS_INSTRUCTIONS = {
    "analyze": "Analyze the code for issues and quality",
    "correct": "Analyze and provide corrected version of the code",
    "optimize": "Analyze and provide optimized version of the code",
    "all": "Analyze the code, provide corrections for any issues, and suggest optimizations",
}

SUMMARY_PROMPT = "Summarize the following text in a concise paragraph:\n\n{text}"

_REPLY_LISTS = """STRENGTHS:
- [strength 1]
- [strength 2]
- [strength 3]
IMPROVEMENTS:
- [improvement suggestion 1]
- [improvement suggestion 2]
- [improvement suggestion 3]"""

TEXT_PROMPT = """You are an expert text analyst. Analyze the following text and provide a comprehensive evaluation based on {rubric}.

{focus}

You MUST provide a numerical score between 0 and {max_score}. Use the following scoring guidelines:
- 0-20: Poor quality, major issues
- 21-40: Below average, significant improvements needed
- 41-60: Average, some improvements needed
- 61-80: Good quality, minor improvements
- 81-100: Excellent quality, minimal improvements needed

Respond using this EXACT format (do not deviate):

SCORE: [numerical score from 0 to {max_score}]
CATEGORY: [brief category/type of the text]
FEEDBACK: [2-3 sentences of overall assessment]
{lists}

Text to analyze:
{text}"""

CODE_PROMPT = """You are an expert code reviewer and optimizer. {language_hint} {instruction}.

{focus}

Evaluate the code based on:
- Syntax correctness
- Logic and functionality
- Performance and efficiency
- Security considerations
- Code style and best practices
- Maintainability and readability

You MUST provide a numerical score between 0 and {max_score}:
- 0-20: Critical issues, code may not work
- 21-40: Major issues, significant problems
- 41-60: Moderate issues, code works but needs improvement
- 61-80: Good code with minor issues
- 81-100: Excellent code, minimal improvements needed

Respond using this EXACT format:

SCORE: [numerical score from 0 to {max_score}]
CATEGORY: Code Analysis - {language_label}
FEEDBACK: [2-3 sentences of overall assessment]
{lists}
{corrected}
{optimized}
CODE_ISSUES:
- TYPE: [syntax|logic|performance|security|style] | SEVERITY: [low|medium|high|critical] | LINE: [line number if applicable] | DESCRIPTION: [issue description] | SUGGESTION: [how to fix]
- TYPE: [type] | SEVERITY: [severity] | LINE: [line] | DESCRIPTION: [description] | SUGGESTION: [suggestion]

Code to analyze:
{code}"""

CODE_BLOCK_SECTION = """
{marker}:
```{fence_tag}
[{placeholder}]
```
"""


def _focus_instruction(focus_areas: Sequence[str]) -> str:
    if not focus_areas:
        return ""
    return f"Pay special attention to: {', '.join(focus_areas)}."


def build_text_analysis_prompt(
    text: str,
    criteria: str,
    max_score: int,
    focus_areas: Sequence[str] = (),
) -> str:
    """Render the prose-evaluation prompt for one of the five rubrics."""
    rubric = CRITERIA_INSTRUCTIONS.get(criteria, CRITERIA_INSTRUCTIONS["general"])
    return TEXT_PROMPT.format(
        rubric=rubric,
        focus=_focus_instruction(focus_areas),
        max_score=max_score,
        lists=_REPLY_LISTS,
        text=text,
    ).strip()


def build_code_analysis_prompt(
    code: str,
    max_score: int,
    focus_areas: Sequence[str] = (),
    language: Optional[str] = None,
    analysis_type: str = "all",
) -> str:
    """
    Render the code-review prompt.

    CORRECTED_CODE is requested only for "correct" and "all";
    OPTIMIZED_CODE only for "optimize" and "all".
    """
    fence_tag = language or ""
    corrected = ""
    if analysis_type in ("correct", "all"):
        corrected = CODE_BLOCK_SECTION.format(
            marker="CORRECTED_CODE",
            fence_tag=fence_tag,
            placeholder="corrected version of the code with fixes applied",
        )
    optimized = ""
    if analysis_type in ("optimize", "all"):
        optimized = CODE_BLOCK_SECTION.format(
            marker="OPTIMIZED_CODE",
            fence_tag=fence_tag,
            placeholder="optimized version of the code with performance improvements",
        )

    return CODE_PROMPT.format(
        language_hint=f"This appears to be {language.upper()} code." if language else "",
        instruction=ANALYSIS_INSTRUCTIONS.get(analysis_type, ANALYSIS_INSTRUCTIONS["all"]),
        focus=_focus_instruction(focus_areas),
        max_score=max_score,
        language_label=language or "Unknown Language",
        lists=_REPLY_LISTS,
        corrected=corrected,
        optimized=optimized,
        code=code,
    ).strip()


def build_summary_prompt(text: str) -> str:
    return SUMMARY_PROMPT.format(text=text)
