import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep host PORT and WEBAPI_UTIL_* settings out of the tests."""
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("WEBAPI_UTIL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("WEBAPI_UTIL_TIMEOUT_KEEP_ALIVE", raising=False)
    monkeypatch.chdir(tmp_path)
