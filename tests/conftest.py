import pytest

from numstat import log


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep a developer's ~/.numstat.yaml or $NUMSTAT_CONFIG out of the tests."""
    monkeypatch.delenv("NUMSTAT_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(log, "LOG_LEVEL", "warning")
