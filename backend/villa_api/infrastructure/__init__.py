"""Infrastructure Layer — database sessions, identity tokens, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Third-party failures are mapped to core/errors.py types before leaving this package
"""
