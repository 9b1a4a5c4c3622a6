"""
Task Evaluator Backend — Services Layer
========================================

What:  Business logic between routes (HTTP) and upstream systems.
How:   Services are plain classes constructed with their collaborators and
       handed to routes through FastAPI dependencies (taskeval.dependencies).

Service Inventory:
    - TextGenerator (abstract): Interface for generative text providers
    - GeminiService: Concrete TextGenerator backed by Google Gemini
    - AnalysisService: detect → prompt → generate → parse
    - OCRService: Tesseract text extraction from uploaded images
    - SummaryService: summarize with the generator and persist the pair
"""
