"""Shared fixtures and helpers for tests."""

import shutil
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from fieldretype.core.syntax import SyntaxTree, parse_source

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the golden-file fixtures."""
    return _REPO_ROOT / "tests" / "fixtures"


@pytest.fixture
def parse_go() -> Callable[[str], SyntaxTree]:
    """Return a helper parsing dedented Go source into a SyntaxTree."""

    def _parse(source: str) -> SyntaxTree:
        return parse_source(textwrap.dedent(source).lstrip("\n").encode("utf-8"))

    return _parse


@pytest.fixture
def gofmt_binary() -> str:
    """Return the gofmt executable, skipping the test when Go is not installed."""
    binary = shutil.which("gofmt")
    if binary is None:
        pytest.skip("gofmt is not installed")
    return binary
