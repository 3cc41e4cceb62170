from datetime import datetime

from pydantic import BaseModel, Field

from app.operating_systems.schemas import OperatingSystemResponse

# Hostname characters; may not start or end with a hyphen or dot
SERVER_NAME_PATTERN = r"^[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?$"


class ServerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=253, pattern=SERVER_NAME_PATTERN)
    os_id: int = Field(gt=0)


class ServerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=253, pattern=SERVER_NAME_PATTERN)
    os_id: int | None = Field(None, gt=0)


class ServerResponse(BaseModel):
    id: int
    name: str
    os_id: int
    os: OperatingSystemResponse | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
