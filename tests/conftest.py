import pytest

from helpers import lottery, stats


@pytest.fixture(autouse=True)
def fresh_process_state(monkeypatch):
    """Each test starts with an uninitialized lottery and disabled statistics."""
    lottery.reset()
    monkeypatch.setattr(stats, "_stats", stats.DetailStatistics())
    yield
    lottery.reset()
