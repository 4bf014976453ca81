"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every resource endpoint answers with an APIResponse envelope (v2 list stub excepted)

Design Decisions:
    - Thin routes delegate to services; authorization lives in dependencies
"""
