from datetime import datetime

from pydantic import BaseModel

from app.servers.schemas import ServerResponse


class ComplianceReportResponse(BaseModel):
    total_servers: int
    supported_servers: int
    end_of_life_servers: int
    ending_soon_servers: int
    os_distribution: dict[str, int]
    os_family_distribution: dict[str, int]
    end_of_life_list: list[ServerResponse]
    ending_soon_list: list[ServerResponse]
    generated_at: datetime
    compliance_score: float
    recommendations: list[str]
    score_description: str
