from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class SiteCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Display name")
    domain: str = Field(..., min_length=1, description="Domain of the tracked site, not validated")


class SiteResponse(BaseModel):
    """Serializes a Site model straight from its attributes"""
    id: str
    name: str
    domain: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        """ISO-8601 in UTC with millisecond precision, e.g. 2024-05-01T09:30:00.123Z"""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat(timespec="milliseconds") + "Z"

    # Pydantic V2 style configuration
    model_config = ConfigDict(from_attributes=True)
