from pathlib import Path
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables.

    Validates configuration at startup to catch misconfiguration early.
    """

    downloads_dir: str = "./downloads"
    schedule_filename: str = "schedule.json"

    catalog_base_url: str = "https://www.globalplayer.com/_next/data/ioXFOWz_-eelUOJbwURpg/catchup"
    catalog_brand: str = "wsqk"
    catalog_station: str = "uk"
    referer_url: str = "https://www.globalplayer.com/catchup/wsqk/uk/"

    request_timeout_sec: float = 0  # 0 disables timeouts
    download_chunk_size: int = 65536
    local_timezone: str | None = None  # None uses the process local zone

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("downloads_dir")
    @classmethod
    def validate_downloads_dir(cls, value: str) -> str:
        """Validate the downloads root can be created."""
        path = Path(value)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return value
        except (OSError, PermissionError) as exc:
            raise ValueError(f"Cannot access downloads path '{value}': {exc}") from exc

    @field_validator("schedule_filename")
    @classmethod
    def validate_schedule_filename(cls, value: str) -> str:
        """Schedule file must be a bare file name inside the downloads root."""
        if not value or Path(value).name != value:
            raise ValueError(f"schedule_filename must be a plain file name: {value!r}")
        return value

    @field_validator("catalog_base_url", "referer_url")
    @classmethod
    def validate_http_urls(cls, value: str, info) -> str:
        """Validate URLs are HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"{info.field_name} must be HTTP/HTTPS: {value}")
        return value.rstrip("/") if info.field_name == "catalog_base_url" else value

    @field_validator("catalog_brand", "catalog_station")
    @classmethod
    def validate_catalog_keys(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} must not be empty")
        return value

    @field_validator("request_timeout_sec")
    @classmethod
    def validate_request_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value < 0:
            raise ValueError("request_timeout_sec must be >= 0")
        return value

    @field_validator("download_chunk_size")
    @classmethod
    def validate_chunk_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("download_chunk_size must be > 0")
        return value

    @field_validator("local_timezone")
    @classmethod
    def validate_local_timezone(cls, value: str | None) -> str | None:
        """Validate the IANA zone used for episode clock times."""
        if value is None or not value.strip():
            return None
        try:
            ZoneInfo(value)
            return value
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(
                f"Invalid timezone: {value}. Must be a valid IANA timezone (e.g., 'Europe/London')"
            ) from exc

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @model_validator(mode="after")
    def validate_paths(self):
        """Validate cross-field configuration."""
        if self.schedule_filename.endswith(".m4a"):
            raise ValueError("schedule_filename must not collide with media files")
        return self

    @property
    def downloads_path(self) -> Path:
        return Path(self.downloads_dir)

    @property
    def schedule_path(self) -> Path:
        return self.downloads_path / self.schedule_filename

    @property
    def show_list_url(self) -> str:
        brand, station = self.catalog_brand, self.catalog_station
        return f"{self.catalog_base_url}/{brand}/{station}.json?brand={brand}&station={station}"

    def show_detail_url(self, show_id: str) -> str:
        brand, station = self.catalog_brand, self.catalog_station
        return (
            f"{self.catalog_base_url}/{brand}/{station}/{show_id}.json"
            f"?brand={brand}&station={station}&id={show_id}"
        )

    def log_summary(self) -> None:
        """Log the loaded configuration."""
        logger.info("Configuration loaded:")
        logger.info("  Downloads: %s", self.downloads_dir)
        logger.info("  Schedule File: %s", self.schedule_path)
        logger.info("  Catalog: %s/%s/%s", self.catalog_base_url, self.catalog_brand, self.catalog_station)
        logger.info("  Referer: %s", self.referer_url)
        logger.info(
            "  Request Timeout: %s",
            f"{self.request_timeout_sec}s" if self.request_timeout_sec else "disabled",
        )
        logger.info("  Download Chunk Size: %s bytes", self.download_chunk_size)
        logger.info("  Local Timezone: %s", self.local_timezone or "system")


# Global singleton instance
_settings: CustomSettings | None = None


def get_settings() -> CustomSettings:
    """
    Get or create the global settings singleton.

    Built lazily so an invalid environment surfaces as a ValidationError
    at the call site instead of at import time.
    """
    global _settings
    if _settings is None:
        _settings = CustomSettings()
    return _settings


def reset_settings() -> None:
    """
    Reset the settings singleton (mainly for testing).

    WARNING: Only use this in test environments!
    """
    global _settings
    _settings = None


def setup_logging(level: str | None = None) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
