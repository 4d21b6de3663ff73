"""
Tests for settings validation and derived paths.
"""
import pytest
from pydantic import ValidationError

from catchup_sync.config import CustomSettings


def make_settings(tmp_path, **overrides):
    return CustomSettings(_env_file=None, downloads_dir=str(tmp_path / "downloads"), **overrides)


def test_defaults_match_fixed_layout(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = CustomSettings(_env_file=None)

    assert settings.downloads_dir == "./downloads"
    assert settings.schedule_path.as_posix() == "downloads/schedule.json"
    assert settings.referer_url == "https://www.globalplayer.com/catchup/wsqk/uk/"
    assert settings.request_timeout_sec == 0


def test_catalog_urls(tmp_path):
    settings = make_settings(tmp_path, catalog_base_url="https://api.test/catchup/")

    assert settings.show_list_url == "https://api.test/catchup/wsqk/uk.json?brand=wsqk&station=uk"
    assert settings.show_detail_url("42") == (
        "https://api.test/catchup/wsqk/uk/42.json?brand=wsqk&station=uk&id=42"
    )


def test_reads_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("CATALOG_BRAND", "smooth")
    monkeypatch.setenv("LOCAL_TIMEZONE", "Europe/London")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = make_settings(tmp_path)

    assert settings.catalog_brand == "smooth"
    assert settings.local_timezone == "Europe/London"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"catalog_base_url": "ftp://example.com"},
        {"referer_url": "example.com"},
        {"schedule_filename": "nested/schedule.json"},
        {"schedule_filename": "episode.m4a"},
        {"catalog_brand": "  "},
        {"request_timeout_sec": -1},
        {"download_chunk_size": 0},
        {"local_timezone": "Mars/Olympus_Mons"},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_settings_rejected(tmp_path, overrides):
    with pytest.raises(ValidationError):
        make_settings(tmp_path, **overrides)


def test_blank_timezone_means_process_zone(tmp_path):
    settings = make_settings(tmp_path, local_timezone=" ")

    assert settings.local_timezone is None
