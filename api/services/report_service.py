"""Service layer for quiz reports."""
import logging

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession

from api.config import REPORTS_LIST_LIMIT
from api.models import ReportCreate
from api.models.db.report import Report
from api.utils import normalize_username

log = logging.getLogger(__name__)


def create_report(db: DBSession, payload: ReportCreate) -> Report:
    """Validate and store a submitted report."""
    username = normalize_username(payload.username)
    quiz_name = (payload.quizName or "").strip()
    if not username or not quiz_name or not payload.questions:
        log.warning("Missing required fields for report creation")
        raise HTTPException(status_code=400, detail="Missing required fields")

    report = Report(
        username=username,
        quiz_name=quiz_name,
        score=payload.score,
        total=payload.total,
        auto_submitted=payload.autoSubmitted,
        reason=payload.reason if payload.autoSubmitted else None,
    )
    report.questions = [question.model_dump() for question in payload.questions]
    db.add(report)
    db.commit()
    db.refresh(report)
    log.info("Saved report %s for %s (%s)", report.id, username, quiz_name)
    return report


def list_reports(
    db: DBSession,
    username: str | None = None,
    limit: int = REPORTS_LIST_LIMIT,
    offset: int = 0,
) -> list[Report]:
    """List reports, newest first, optionally for one user."""
    query = select(Report)
    if username:
        query = query.where(Report.username == normalize_username(username))
    query = query.order_by(Report.created_at.desc(), Report.id.desc())
    query = query.limit(limit).offset(offset)
    return list(db.execute(query).scalars().all())


def get_report(db: DBSession, report_id: int) -> Report:
    report = db.get(Report, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report
