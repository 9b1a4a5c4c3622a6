"""Tests for prompt rendering."""

from taskeval.analysis.prompts import (
    CRITERIA_INSTRUCTIONS,
    build_code_analysis_prompt,
    build_summary_prompt,
    build_text_analysis_prompt,
)


class TestTextPrompt:

    def test_rubric_score_range_and_text(self):
        prompt = build_text_analysis_prompt("My essay.", "academic", 10)

        assert CRITERIA_INSTRUCTIONS["academic"] in prompt
        assert "SCORE: [numerical score from 0 to 10]" in prompt
        assert prompt.endswith("Text to analyze:\nMy essay.")

    def test_unknown_criteria_uses_general_rubric(self):
        prompt = build_text_analysis_prompt("x", "code", 100)
        assert CRITERIA_INSTRUCTIONS["general"] in prompt

    def test_focus_areas(self):
        prompt = build_text_analysis_prompt("x", "writing", 100, ["tone", "grammar"])
        assert "Pay special attention to: tone, grammar." in prompt

    def test_no_focus_line_without_focus_areas(self):
        assert "Pay special attention" not in build_text_analysis_prompt("x", "writing", 100)


class TestCodePrompt:

    def test_all_requests_both_code_blocks(self):
        prompt = build_code_analysis_prompt("code", 100, language="python", analysis_type="all")

        assert "CORRECTED_CODE:\n```python" in prompt
        assert "OPTIMIZED_CODE:\n```python" in prompt
        assert "This appears to be PYTHON code." in prompt
        assert "CATEGORY: Code Analysis - python" in prompt
        assert "CODE_ISSUES:" in prompt

    def test_analyze_requests_no_code_blocks(self):
        prompt = build_code_analysis_prompt("code", 100, analysis_type="analyze")

        assert "CORRECTED_CODE" not in prompt
        assert "OPTIMIZED_CODE" not in prompt
        assert "CODE_ISSUES:" in prompt

    def test_correct_requests_corrected_only(self):
        prompt = build_code_analysis_prompt("code", 100, analysis_type="correct")

        assert "CORRECTED_CODE" in prompt
        assert "OPTIMIZED_CODE" not in prompt

    def test_optimize_requests_optimized_only(self):
        prompt = build_code_analysis_prompt("code", 100, analysis_type="optimize")

        assert "CORRECTED_CODE" not in prompt
        assert "OPTIMIZED_CODE" in prompt

    def test_unknown_language_label(self):
        prompt = build_code_analysis_prompt("code", 100)

        assert "CATEGORY: Code Analysis - Unknown Language" in prompt
        assert "This appears to be" not in prompt


def test_summary_prompt():
    assert build_summary_prompt("Long text") == (
        "Summarize the following text in a concise paragraph:\n\nLong text"
    )
