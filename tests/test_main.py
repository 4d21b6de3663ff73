"""
Tests for the process entry point and its exit codes.
"""
import pytest

from catchup_sync import config, main as entry
from catchup_sync.services.catalog_client import CatalogError


@pytest.fixture(autouse=True)
def fresh_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config.reset_settings()
    yield
    config.reset_settings()


def test_success_exits_zero(monkeypatch):
    async def fake_run_sync(settings):
        return {"status": "success", "schedule_path": "downloads/schedule.json"}

    monkeypatch.setattr(entry, "run_sync", fake_run_sync)

    assert entry.main() == entry.EXIT_OK


@pytest.mark.parametrize(
    "error",
    [CatalogError("HTTP 500"), ValueError("bad schedule"), PermissionError("denied")],
)
def test_fatal_error_exits_one(monkeypatch, error):
    async def fake_run_sync(settings):
        raise error

    monkeypatch.setattr(entry, "run_sync", fake_run_sync)

    assert entry.main() == entry.EXIT_RUN_FAILED


def test_invalid_configuration_exits_two(monkeypatch):
    monkeypatch.setenv("LOCAL_TIMEZONE", "Mars/Olympus_Mons")

    assert entry.main() == entry.EXIT_CONFIG_ERROR
