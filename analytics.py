import os
from datetime import timezone
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loguru import logger

from db import get_db
from models import PollSubmission
from questions import poll_config
from tally import group_by_section, tally_submissions
from heatmap import bucketize
import schemas

router = APIRouter()


def get_poll_timezone():
    """Fuso de POLL_TIMEZONE; None usa o horário local do servidor."""
    name = os.getenv("POLL_TIMEZONE")
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"⚠️ POLL_TIMEZONE inválido: {name}, usando horário do servidor")
        return None


def listar_submissoes(db: Session) -> List[PollSubmission]:
    return (
        db.query(PollSubmission)
        .order_by(PollSubmission.created_at.desc(), PollSubmission.id.desc())
        .all()
    )


def created_at_utc(submission: PollSubmission):
    # created_at é gravado em UTC sem tzinfo
    moment = submission.created_at
    if moment is not None and moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def build_summary(submissions: List[PollSubmission]) -> schemas.AnalyticsSummary:
    emails = [s for s in submissions if s.email and s.email.strip()]
    latest = created_at_utc(submissions[0]) if submissions else None
    return schemas.AnalyticsSummary(
        total_responses=len(submissions),
        emails_collected=len(emails),
        question_count=len(poll_config),
        latest_response=latest,
    )

# ================= ANALYTICS ENDPOINTS =================

@router.get("/api/analytics", response_model=schemas.DashboardResponse, tags=["Analytics"])
def painel(db: Session = Depends(get_db)):
    """
    Painel completo: resumo, mapa de calor e contagens por seção.
    """
    submissoes = listar_submissoes(db)
    tallies = tally_submissions(poll_config, submissoes)
    heat = bucketize((created_at_utc(s) for s in submissoes), tz=get_poll_timezone())
    return schemas.DashboardResponse(
        summary=build_summary(submissoes),
        heatmap=heat,
        sections=group_by_section(poll_config, tallies),
    )


@router.get("/api/analytics/questions", response_model=List[schemas.QuestionTally], tags=["Analytics"])
def contagem_por_pergunta(db: Session = Depends(get_db)):
    return tally_submissions(poll_config, listar_submissoes(db))


@router.get("/api/analytics/heatmap", response_model=schemas.HeatmapResult, tags=["Analytics"])
def mapa_de_calor(db: Session = Depends(get_db)):
    submissoes = listar_submissoes(db)
    return bucketize((created_at_utc(s) for s in submissoes), tz=get_poll_timezone())
