"""
Task Evaluator Backend — API Routes Package
============================================

Route Inventory:
    - analyze.py:        POST /api/analyze         (prose / code evaluation)
    - analyze_image.py:  POST /api/analyze-image   (screenshot OCR)
    - summarize.py:      POST /api/summarize       (summarize and store)
    - health.py:         GET  /health              (dependency health check)

Routes stay thin: extract request data, call a service obtained through
taskeval.dependencies, return the schema. Errors propagate to the global
exception handlers in main.py.
"""
