from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from loguru import logger

from db import get_db
from models import PollSubmission
from questions import InvalidAnswerError, poll_config
import schemas

router = APIRouter()

# ==================== QUESTIONÁRIO ====================

@router.get("/api/poll/questions", response_model=schemas.QuestionnaireOut, tags=["Poll"])
def listar_perguntas():
    """Perguntas na ordem do questionário e os divisores de seção."""
    questions = [
        schemas.QuestionOut(
            index=i,
            field_key=poll_config.field_for(i),
            headline=q.headline,
            section=q.section,
            options=[schemas.OptionOut(label=o.label, image=o.image) for o in q.options],
            multi_select=q.multi_select,
            max_select=q.max_select,
            conditional_field=(
                schemas.ConditionalFieldOut(**q.conditional_field.model_dump())
                if q.conditional_field else None
            ),
        )
        for i, q in enumerate(poll_config.questions)
    ]
    dividers = [
        schemas.SectionDividerOut(before_question=i, **d.model_dump())
        for i, d in sorted(poll_config.dividers.items())
    ]
    return schemas.QuestionnaireOut(questions=questions, dividers=dividers)


def build_submission(data: schemas.SubmissionCreate) -> PollSubmission:
    """Valida as respostas contra a configuração e monta a linha a gravar."""
    values = {}
    for index in range(len(poll_config)):
        field = poll_config.field_for(index)
        values[field] = poll_config.normalize_answer(index, getattr(data, field))

    for index, cond in poll_config.conditional_fields():
        answer = values[poll_config.field_for(index)]
        values[cond.field_key] = poll_config.normalize_conditional(
            index, answer, getattr(data, cond.field_key)
        )

    return PollSubmission(email=str(data.email) if data.email else None, **values)


@router.post("/api/poll/submit", response_model=schemas.SubmitResult, tags=["Poll"])
def enviar_resposta(data: schemas.SubmissionCreate, db: Session = Depends(get_db)):
    try:
        submission = build_submission(data)
    except InvalidAnswerError as e:
        logger.warning(f"⚠️ Submissão rejeitada: {e}")
        raise HTTPException(
            status_code=422,
            detail={"field": e.field, "msg": e.message},
        )

    try:
        db.add(submission)
        db.commit()
        db.refresh(submission)
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Erro ao gravar submissão: {str(e)}")
        raise HTTPException(status_code=500, detail="Erro ao gravar resposta")

    logger.info(f"✅ Nova submissão: {submission.id}")
    return schemas.SubmitResult(id=submission.id)
