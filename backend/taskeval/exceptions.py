"""
Task Evaluator Backend — Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for each failure scenario.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) catch these
       and return `{"error": message}` JSON bodies with the mapped status.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    TaskEvalError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── AnalysisError     → 500 (analysis pipeline failed, cause in message)
    ├── LLMServiceError   → 500 (Gemini call failed or returned nothing)
    ├── OCRServiceError   → 500 (tesseract could not read the image)
    ├── SummaryError      → 500 (summarize-and-store failed)
    └── DatabaseError     → 500 (persistence failed)

Parsing anomalies in AI replies are NOT exceptions: the response parser
degrades to a fallback result instead (see taskeval.analysis.parser).
"""

from typing import Any, Dict, Optional


class TaskEvalError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, NOT returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TaskEvalError):
    """
    Raised when client input fails a business rule.

    When:    Missing summary text, missing or oversized image upload.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types, unknown enum values) are still
    answered by FastAPI's own 422 handling.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class LLMServiceError(TaskEvalError):
    """
    Raised when the Gemini call fails or yields no response object.

    There is no retry: one request maps to exactly one upstream call.
    """

    def __init__(
        self,
        message: str = "AI service request failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AnalysisError(TaskEvalError):
    """
    Raised by AnalysisService when an analysis cannot be produced.

    The message is "Failed to analyze text: <cause>" and is returned to the
    client verbatim by POST /api/analyze.
    """

    def __init__(
        self,
        message: str = "Failed to analyze text",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class OCRServiceError(TaskEvalError):
    """Raised when the OCR engine cannot decode or read an uploaded image."""

    def __init__(
        self,
        message: str = "Failed to analyze image",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SummaryError(TaskEvalError):
    """
    Raised when summarizing or storing a summary fails.

    The client only ever sees the generic message; the upstream cause is kept
    in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "Something went wrong",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(TaskEvalError):
    """
    Raised when database operations fail unexpectedly.

    Raised by get_db_session when the closing commit fails. The message
    returned to the client is always generic; the SQL error is logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "Something went wrong",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
