"""Services Layer — resource handlers and DTO mapping.

Invariants:
    - Handlers depend on repository protocols, never on concrete repositories
    - Handlers are stateless; one envelope per call
"""
