from datetime import date, datetime

from pydantic import BaseModel, Field


class OperatingSystemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    version: str = Field(min_length=1, max_length=100)
    end_of_support: date  # YYYY-MM-DD


class OperatingSystemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    version: str | None = Field(None, min_length=1, max_length=100)
    end_of_support: date | None = None


class OperatingSystemResponse(BaseModel):
    id: int
    name: str
    version: str
    end_of_support: date
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SupportStatusResponse(BaseModel):
    os_id: int
    status: str
    label: str
    days_until_end_of_support: int
