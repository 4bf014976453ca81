"""Core Layer Boundaries — core modules import no IO-capable layer.

Invariants:
    - No import of villa_api services/api/infrastructure/repositories/db
    - SQLAlchemy limited to the top-level expression namespace
"""

import ast
from pathlib import Path

import pytest

import villa_api.core

CORE_DIR = Path(villa_api.core.__file__).parent

FORBIDDEN_PREFIXES = (
    "villa_api.services", "villa_api.api", "villa_api.infrastructure",
    "villa_api.repositories", "villa_api.db",
    "sqlalchemy.ext", "sqlalchemy.orm", "sqlalchemy.engine", "sqlalchemy.pool",
)


def _imported_modules(path: Path) -> set[str]:
    modules: set[str] = set()
    for node in ast.walk(ast.parse(path.read_text())):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            modules.add(node.module)
    return modules


@pytest.mark.parametrize("path", sorted(CORE_DIR.glob("*.py")), ids=lambda p: p.name)
def test_core_module_imports_no_io_layer(path):
    offending = {
        m for m in _imported_modules(path)
        if m.startswith(FORBIDDEN_PREFIXES)
    }
    assert offending == set()


def test_repository_protocols_use_only_expression_types():
    modules = _imported_modules(CORE_DIR / "repository_protocols.py")
    assert {m for m in modules if m.startswith("sqlalchemy")} == {"sqlalchemy"}
