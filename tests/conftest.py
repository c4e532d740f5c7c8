"""
Shared pytest fixtures for all tests.
"""

from pathlib import Path

import pytest

from chunking_service.api.routes_chunk import get_selector
from chunking_service.core.config import get_settings

# ---------------------------------------------------------------------------
# Automatic test markers based on path
# ---------------------------------------------------------------------------
# We want to avoid sprinkling `@pytest.mark.unit` / `integration` decorators
# throughout the codebase.  Instead, assign the marker implicitly from the
# directory the test file lives in.


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Dynamically add pytest markers depending on filepath.

    Any test located in ``tests/unit`` gets the ``unit`` marker and tests in
    ``tests/integration`` get ``integration``, so ``pytest -m unit`` works
    without explicit decorators.
    """

    root_path = Path(config.rootdir)

    for item in items:
        rel_path = Path(item.fspath).resolve().relative_to(root_path).as_posix()

        if rel_path.startswith("tests/unit/"):
            item.add_marker("unit")
        elif rel_path.startswith("tests/integration/"):
            item.add_marker("integration")


# ---------------------------------------------------------------------------
# Keep every test offline
# ---------------------------------------------------------------------------
# A developer `.env` may carry a real completion credential.  Environment
# variables win over the dotenv file, so blanking the key here guarantees no
# test builds a live client unless it injects one explicitly.


@pytest.fixture(autouse=True)
def _offline_settings(monkeypatch):
    monkeypatch.setenv("COMPLETION_API_KEY", "")
    monkeypatch.delenv("API_AUTH_KEY", raising=False)
    get_settings.cache_clear()
    get_selector.cache_clear()
    try:
        yield
    finally:
        get_settings.cache_clear()
        get_selector.cache_clear()
