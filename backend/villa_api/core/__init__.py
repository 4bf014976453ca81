"""Core Layer — domain types, error hierarchy, and storage contracts. No IO.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, repositories/ or db/
    - SQLAlchemy appears only as expression types (repository predicates are ColumnElement[bool]);
      no engine, session, or ORM imports, so nothing here can open a connection
"""
