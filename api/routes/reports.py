"""Report endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session as DbSession

from api.config import REPORTS_LIST_LIMIT
from api.database import get_db
from api.models import ReportCreate
from api.services import report_service

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Save a finished quiz submission."""
    return report_service.create_report(db, payload).to_payload()


@router.get("")
def list_reports(
    db: Annotated[DbSession, Depends(get_db)],
    username: str | None = Query(None),
    limit: int = Query(REPORTS_LIST_LIMIT, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> list[dict[str, object]]:
    """List reports, newest first."""
    reports = report_service.list_reports(db, username, limit, offset)
    return [report.to_payload() for report in reports]


@router.get("/{report_id}")
def get_report(
    report_id: int,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Get a single report."""
    return report_service.get_report(db, report_id).to_payload()
