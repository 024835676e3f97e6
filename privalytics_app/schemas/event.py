from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_to_text(value: Any) -> Any:
    """Render JSON scalars as text; falsy ones (0, false) become empty."""
    if isinstance(value, bool):
        return "true" if value else ""
    if isinstance(value, (int, float)):
        return str(value) if value else ""
    return value


class TrackRequest(BaseModel):
    """
    Pageview beacon payload sent by script.js.
    
    siteId is not checked against registered sites. Any truthy JSON scalar
    is accepted for either field and stored as text.
    """
    site_id: str = Field(..., alias="siteId", min_length=1)
    path: Optional[str] = Field("/", description="Page path, defaults to /")

    @field_validator("site_id", "path", mode="before")
    @classmethod
    def coerce_scalars(cls, value: Any) -> Any:
        return _scalar_to_text(value)

    @field_validator("path", mode="after")
    @classmethod
    def default_path(cls, value: Optional[str]) -> str:
        return value or "/"

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"siteId": "3f1c2a6e-8d7b-4c1e-9f2a-0b5d6e7f8a9b", "path": "/blog/hello"}
        },
    )
