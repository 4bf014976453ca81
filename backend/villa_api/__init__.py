"""Villa API — versioned CRUD service for numbered villa units.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
