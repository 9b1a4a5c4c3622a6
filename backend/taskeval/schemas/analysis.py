"""
Task Evaluator Backend — Analysis Schemas
==========================================

What:  Pydantic models for POST /api/analyze and POST /api/analyze-image.
How:   Python attributes are snake_case; JSON keys are camelCase through an
       alias generator, so `max_score` travels as `maxScore`.

    AnalyzeRequest ──▶ AnalysisService ──▶ AnalysisResult
         │                                     │
         └── AnalysisOptions                   └── CodeIssue[]
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Criteria = Literal["writing", "academic", "business", "creative", "general", "code"]
AnalysisType = Literal["analyze", "correct", "optimize", "all"]
IssueType = Literal["syntax", "logic", "performance", "security", "style"]
Severity = Literal["low", "medium", "high", "critical"]

ISSUE_TYPES = frozenset(IssueType.__args__)
SEVERITIES = frozenset(Severity.__args__)

DEFAULT_MAX_SCORE = 100
DEFAULT_ANALYSIS_TYPE: AnalysisType = "all"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AnalysisOptions(CamelModel):
    """
    What:  Per-request knobs for an analysis.

    Fields:
        criteria:      Rubric for prose; "code" forces code analysis.
                       None lets the input-type detector decide.
        max_score:     Upper bound of the score scale (default 100).
        focus_areas:   Extra aspects the model should pay attention to.
        language:      Programming language hint; overrides detection.
        analysis_type: For code, whether to analyze, correct, optimize or all.
    """
    criteria: Optional[Criteria] = Field(default=None, description="Evaluation rubric")
    max_score: int = Field(default=DEFAULT_MAX_SCORE, gt=0, description="Maximum score")
    focus_areas: List[str] = Field(default_factory=list, description="Aspects to emphasise")
    language: Optional[str] = Field(default=None, description="Programming language hint")
    analysis_type: AnalysisType = Field(
        default=DEFAULT_ANALYSIS_TYPE,
        description="Code analysis mode: analyze, correct, optimize or all",
    )


class AnalyzeRequest(CamelModel):
    """
    Body of POST /api/analyze.

    `text` is deliberately optional at the schema level: a missing text is
    handed to the service, which rejects it with an AnalysisError (HTTP 500).
    """
    text: Optional[str] = Field(default=None, description="Prose or source code to analyze")
    options: Optional[AnalysisOptions] = Field(default=None)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CodeIssue(CamelModel):
    """One problem reported by the model for a piece of code."""
    type: IssueType
    line: Optional[int] = None
    description: str
    severity: Severity
    suggestion: str


class AnalysisResult(CamelModel):
    """
    What:  Structured evaluation parsed from the model's free-text reply.
    Who:   Returned by POST /api/analyze; absent optional fields are omitted.

    Invariants:
        - 0 <= score <= max_score of the request
        - strengths and improvements always hold at least one entry
    """
    score: int = Field(ge=0, description="Score clamped to [0, maxScore]")
    feedback: str
    strengths: List[str]
    improvements: List[str]
    category: Optional[str] = None
    corrected_code: Optional[str] = None
    optimized_code: Optional[str] = None
    code_issues: Optional[List[CodeIssue]] = None


class ImageAnalysisResponse(CamelModel):
    """Body returned by POST /api/analyze-image."""
    feedback: str = Field(description="Static completion message")
    extracted_text: str = Field(description="Text recognised in the uploaded image")
