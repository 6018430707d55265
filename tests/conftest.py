import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'eventgraph' and tests/ importable for helpers.
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from eventgraph.core.log import reset_stdlib_logging_for_tests


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Drop EVENTGRAPH_* overrides from the developer shell and reset logging."""
    for key in list(os.environ):
        if key.startswith("EVENTGRAPH_"):
            monkeypatch.delenv(key, raising=False)
    reset_stdlib_logging_for_tests()
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch) -> Path:
    """Isolated project root with an empty ``.eventgraph/config`` directory.

    The working directory is switched to the project so configuration
    auto-discovery resolves here.
    """
    (tmp_path / ".eventgraph" / "config").mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(tmp_path)
    return tmp_path
