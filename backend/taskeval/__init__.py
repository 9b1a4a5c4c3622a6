"""
Task Evaluator Backend — Application Package
=============================================

What: AI-assisted evaluation of prose, source code and screenshots.
How:  Layered the same way throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Gemini, OCR, Summary)   │  ← Orchestration, upstream calls
    ├─────────────────────────────────────┤
    │  Analysis (detector/prompts/parser) │  ← Pure functions
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
