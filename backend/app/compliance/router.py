from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.compliance.aggregation import group_by_os_identity
from app.compliance.reporting import build_compliance_payload
from app.compliance.schemas import ComplianceReportResponse
from app.database import get_db
from app.operating_systems.service import list_operating_systems
from app.servers.schemas import ServerResponse
from app.servers.service import list_servers

logger = structlog.get_logger()

router = APIRouter(prefix="/servers", tags=["compliance"])


@router.get("/compliance", response_model=ComplianceReportResponse)
async def compliance_report(db: AsyncSession = Depends(get_db)):
    servers = await list_servers(db)

    try:
        catalog = await list_operating_systems(db)
    except SQLAlchemyError as e:
        # The report is still useful without upgrade suggestions
        logger.warning("compliance_catalog_unavailable", error=str(e))
        catalog = []

    payload = build_compliance_payload(servers, catalog, datetime.now(timezone.utc))
    logger.info(
        "compliance_report_generated",
        total_servers=payload["total_servers"],
        end_of_life_servers=payload["end_of_life_servers"],
        ending_soon_servers=payload["ending_soon_servers"],
        compliance_score=round(payload["compliance_score"], 2),
    )
    payload["end_of_life_list"] = [ServerResponse.model_validate(s) for s in payload["end_of_life_list"]]
    payload["ending_soon_list"] = [ServerResponse.model_validate(s) for s in payload["ending_soon_list"]]
    return ComplianceReportResponse(**payload)


@router.get("/grouped", response_model=dict[str, list[ServerResponse]])
async def servers_grouped_by_os(db: AsyncSession = Depends(get_db)):
    servers = await list_servers(db)
    return {
        key: [ServerResponse.model_validate(s) for s in members]
        for key, members in group_by_os_identity(servers).items()
    }
