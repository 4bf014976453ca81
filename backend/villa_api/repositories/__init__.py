"""Repositories — SQLAlchemy implementations of the core repository protocols.

Invariants:
    - One repository instance per request (bound to that request's AsyncSession)
    - Storage exceptions leave this package as VillaApiError subclasses only
"""
