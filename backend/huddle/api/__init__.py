"""API Layer — FastAPI routes, bearer-token dependency, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every route except sign-in, sign-up and health resolves an Identity first
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to services; services never see the request
"""
