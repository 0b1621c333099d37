import csv
import io
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session
from loguru import logger

from db import get_db
from models import PollSubmission
from questions import PollConfig, poll_config
from analytics import created_at_utc, listar_submissoes
import schemas

router = APIRouter()

CSV_FILENAME = "community-poll-responses.csv"
FORMULA_PREFIXES = ("=", "+", "-", "@")

CONDITIONAL_HEADERS = {
    "q9_ages": "Children Ages",
    "q18_other": "Other Pet",
}


def export_columns(config: PollConfig):
    """(cabeçalho, coluna) na ordem do CSV; campos condicionais após a pergunta."""
    columns = [("ID", "id"), ("Email", "email")]
    for index, question in enumerate(config.questions):
        columns.append((question.headline, config.field_for(index)))
        cond = question.conditional_field
        if cond is not None:
            columns.append((CONDITIONAL_HEADERS.get(cond.field_key, cond.placeholder), cond.field_key))
    return columns


def csv_cell(value):
    # Texto livre começando com = + - @ vira fórmula na planilha
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def submissions_to_csv(config: PollConfig, submissions: List[PollSubmission]) -> str:
    columns = export_columns(config)
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow([header for header, _ in columns] + ["Submitted At"])
    for s in submissions:
        row = [csv_cell(getattr(s, key) or "") for _, key in columns]
        moment = created_at_utc(s)
        row.append(moment.isoformat().replace("+00:00", "Z") if moment else "")
        writer.writerow(row)
    return buffer.getvalue()

# ==================== ADMIN ====================

@router.get("/api/admin/submissions", response_model=List[schemas.SubmissionOut], tags=["Admin"])
def listar(db: Session = Depends(get_db)):
    return listar_submissoes(db)


@router.get("/api/admin/submissions/count", response_model=schemas.CountResponse, tags=["Admin"])
def contar(db: Session = Depends(get_db)):
    return schemas.CountResponse(count=db.query(PollSubmission).count())


@router.get("/api/admin/export", tags=["Admin"])
def exportar_csv(db: Session = Depends(get_db)):
    content = submissions_to_csv(poll_config, listar_submissoes(db))
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )


@router.delete("/api/admin/submissions", response_model=schemas.ClearResult, tags=["Admin"])
def limpar_tudo(db: Session = Depends(get_db)):
    """Apaga todas as submissões (e os emails). Não pode ser desfeito."""
    try:
        deleted = db.query(PollSubmission).delete()
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Erro ao limpar submissões: {str(e)}")
        raise HTTPException(status_code=500, detail="Erro ao limpar respostas")

    logger.info(f"🗑️ Submissões removidas: {deleted}")
    return schemas.ClearResult(deleted=deleted)
