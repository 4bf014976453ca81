"""Database Schema — declarative Base, naming convention, and audit-column mixin.

Design Decisions:
    - Engine and session lifecycle live in infrastructure/database.py; this package holds no IO
"""
