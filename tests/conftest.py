"""Root test configuration: isolate tests from local config files and env vars"""

import pytest

from shadigest.config import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test in an empty CWD with no SHADIGEST_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)
