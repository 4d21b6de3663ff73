from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catchup_sync.utils.timezone import parse_iso8601_to_utc, DateFormatError


class _UpstreamModel(BaseModel):
    """Base for upstream payloads; unknown fields are ignored"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ShowSummaryModel(_UpstreamModel):
    """Show summary record from the catalog listing"""
    id: str = Field(..., min_length=1, description="Catalog ID of the show")
    title: str = Field(..., description="Display title")
    description: str | None = Field(None, description="Short description")
    image_url: str | None = Field(None, alias="imageUrl", description="Show artwork URL")

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Numeric IDs are accepted and kept as strings"""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class EpisodeModel(_UpstreamModel):
    """Episode record from a show detail page"""
    start_date: datetime = Field(..., alias="startDate", description="ISO8601 broadcast start")
    stream_url: str | None = Field(None, alias="streamUrl", description="Audio stream URL")

    @field_validator('start_date', mode='before')
    @classmethod
    def parse_start_date(cls, v):
        """Parse with the centralized parser so every start is aware UTC"""
        if isinstance(v, datetime):
            return v
        if not isinstance(v, str):
            raise ValueError(f"startDate must be an ISO8601 string, got {type(v).__name__}")
        try:
            return parse_iso8601_to_utc(v)
        except DateFormatError as e:
            raise ValueError(str(e)) from e

    @field_validator('stream_url', mode='before')
    @classmethod
    def blank_stream_url(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ShowDetailModel(_UpstreamModel):
    """Full show record from a show detail page"""
    title: str
    description: str | None = None
    episodes: list[EpisodeModel] = Field(default_factory=list)


class ShowListProps(_UpstreamModel):
    catchup_info: list[ShowSummaryModel] = Field(..., alias="catchupInfo")


class ShowDetailProps(_UpstreamModel):
    catchup_info: ShowDetailModel = Field(..., alias="catchupInfo")


class ShowListPage(_UpstreamModel):
    """Catalog listing response body"""
    page_props: ShowListProps = Field(..., alias="pageProps")


class ShowDetailPage(_UpstreamModel):
    """Show detail response body"""
    page_props: ShowDetailProps = Field(..., alias="pageProps")
