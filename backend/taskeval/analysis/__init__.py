"""
Pure analysis helpers: input-type detection, prompt templates, reply parsing.

Nothing in this package performs I/O; the services layer wires these
functions to the Gemini client.
"""

from taskeval.analysis.detector import InputDetection, detect_input_type
from taskeval.analysis.parser import parse_code_analysis, parse_text_analysis
from taskeval.analysis.prompts import (
    build_code_analysis_prompt,
    build_summary_prompt,
    build_text_analysis_prompt,
)

__all__ = [
    "InputDetection",
    "detect_input_type",
    "parse_code_analysis",
    "parse_text_analysis",
    "build_code_analysis_prompt",
    "build_summary_prompt",
    "build_text_analysis_prompt",
]
