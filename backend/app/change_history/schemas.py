from datetime import date, datetime

from pydantic import BaseModel


class ChangeHistoryResponse(BaseModel):
    id: int
    server_id: int | None
    server_name: str
    change_type: str
    old_os_id: int | None = None
    new_os_id: int | None = None
    old_os_name: str | None = None
    old_os_version: str | None = None
    new_os_name: str | None = None
    new_os_version: str | None = None
    changed_at: datetime

    model_config = {"from_attributes": True}


class ChangeHistoryFilter(BaseModel):
    server_id: int | None = None
    change_type: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    limit: int = 100
    offset: int = 0
