"""
Import-boundary enforcement for the money kernel.

1. Kernel independence -- money_kernel/** may not import money_config.
2. Domain purity      -- money_kernel/domain/** may not import SQLAlchemy,
                         YAML, or the persistence adapter.
3. No float arithmetic -- money_kernel/domain/** may not call float().

All scanning is done via AST -- these tests are read-only.
"""

import ast
import glob
from pathlib import Path

import pytest

pytestmark = pytest.mark.architecture

_ROOT = Path(__file__).resolve().parents[2]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _python_files(root: str) -> list[str]:
    """Return all .py files under *root*, sorted for deterministic order."""
    return sorted(glob.glob(f"{_ROOT / root}/**/*.py", recursive=True))


def _parse(filepath: str) -> ast.AST | None:
    try:
        return ast.parse(Path(filepath).read_text(), filename=filepath)
    except (SyntaxError, UnicodeDecodeError):
        return None


def _extract_imports(filepath: str) -> list[tuple[int, str]]:
    """Return (line_number, module_string) for every import in *filepath*."""
    tree = _parse(filepath)
    if tree is None:
        return []

    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


def _matches_any(module: str, prefixes: tuple[str, ...]) -> bool:
    """True if *module* equals or is a child of any prefix."""
    for prefix in prefixes:
        if module == prefix or module.startswith(f"{prefix}."):
            return True
    return False


def _violations(root: str, forbidden: tuple[str, ...]) -> list[str]:
    found = []
    for filepath in _python_files(root):
        for lineno, module in _extract_imports(filepath):
            if _matches_any(module, forbidden):
                found.append(f"{filepath}:{lineno} imports {module}")
    return found


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestKernelIndependence:
    def test_scanner_finds_kernel_files(self):
        assert _python_files("money_kernel")

    def test_kernel_does_not_import_config(self):
        assert _violations("money_kernel", ("money_config",)) == []


class TestDomainPurity:
    def test_domain_has_no_orm_or_yaml(self):
        forbidden = ("sqlalchemy", "yaml", "money_kernel.db", "money_config")
        assert _violations("money_kernel/domain", forbidden) == []

    def test_domain_never_calls_float(self):
        calls = []
        for filepath in _python_files("money_kernel/domain"):
            tree = _parse(filepath)
            for node in ast.walk(tree):
                if (
                    isinstance(node, ast.Call)
                    and isinstance(node.func, ast.Name)
                    and node.func.id == "float"
                ):
                    calls.append(f"{filepath}:{node.lineno}")
        assert calls == []
