from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Any, List, Optional, Union

# ==================== SCHEMAS DE PERGUNTAS ====================

class OptionOut(BaseModel):
    label: str
    image: Optional[str] = None


class ConditionalFieldOut(BaseModel):
    trigger_value: str
    placeholder: str
    field_key: str


class QuestionOut(BaseModel):
    """Pergunta como exibida no questionário."""
    index: int
    field_key: str
    headline: str
    section: str
    options: List[OptionOut]
    multi_select: bool
    max_select: Optional[int] = None
    conditional_field: Optional[ConditionalFieldOut] = None


class SectionDividerOut(BaseModel):
    before_question: int
    headline: str
    subtext: str
    image: Optional[str] = None


class QuestionnaireOut(BaseModel):
    questions: List[QuestionOut]
    dividers: List[SectionDividerOut]

# ==================== SCHEMAS DE SUBMISSÃO ====================

Answer = Optional[Union[str, List[str]]]


class SubmissionCreate(BaseModel):
    """
    Respostas completas de um participante.
    Multi-select aceita lista ou texto separado por vírgula.
    """
    email: Optional[EmailStr] = None
    q0: Answer = None
    q1: Answer = None
    q2: Answer = None
    q3: Answer = None
    q4: Answer = None
    q5: Answer = None
    q6: Answer = None
    q7: Answer = None
    q8: Answer = None
    q9: Answer = None
    q9_ages: Optional[str] = Field(None, alias="q9Ages")
    q10: Answer = None
    q11: Answer = None
    q12: Answer = None
    q13: Answer = None
    q14: Answer = None
    q15: Answer = None
    q16: Answer = None
    q17: Answer = None
    q18: Answer = None
    q18_other: Optional[str] = Field(None, alias="q18Other")
    q19: Answer = None
    q20: Answer = None

    class Config:
        populate_by_name = True

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SubmissionOut(BaseModel):
    id: int
    email: Optional[str] = None
    q0: Optional[str] = None
    q1: Optional[str] = None
    q2: Optional[str] = None
    q3: Optional[str] = None
    q4: Optional[str] = None
    q5: Optional[str] = None
    q6: Optional[str] = None
    q7: Optional[str] = None
    q8: Optional[str] = None
    q9: Optional[str] = None
    q9_ages: Optional[str] = None
    q10: Optional[str] = None
    q11: Optional[str] = None
    q12: Optional[str] = None
    q13: Optional[str] = None
    q14: Optional[str] = None
    q15: Optional[str] = None
    q16: Optional[str] = None
    q17: Optional[str] = None
    q18: Optional[str] = None
    q18_other: Optional[str] = None
    q19: Optional[str] = None
    q20: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SubmitResult(BaseModel):
    success: bool = True
    id: int


class CountResponse(BaseModel):
    count: int


class ClearResult(BaseModel):
    success: bool = True
    deleted: int

# ==================== SCHEMAS DE ANALYTICS ====================

class TallyEntry(BaseModel):
    label: str
    count: int
    percent: float = 0.0  # em relação ao total de submissões


class QuestionTally(BaseModel):
    """Contagem por opção de uma pergunta, ordenada por frequência."""
    index: int
    headline: str
    section: str
    is_multi_select: bool
    data: List[TallyEntry]
    top_answer: str


class SectionTallies(BaseModel):
    name: str
    questions: List[QuestionTally]


class HeatmapResult(BaseModel):
    """Grade 7x24 (dia da semana x hora), domingo = 0."""
    grid: List[List[int]]
    levels: List[List[int]]
    max_count: int
    total: int
    skipped: int
    has_data: bool
    peak_day_index: Optional[int] = None
    peak_hour_index: Optional[int] = None
    peak_day: Optional[str] = None
    peak_hour: Optional[str] = None


class AnalyticsSummary(BaseModel):
    total_responses: int
    emails_collected: int
    question_count: int
    latest_response: Optional[datetime] = None


class DashboardResponse(BaseModel):
    summary: AnalyticsSummary
    heatmap: HeatmapResult
    sections: List[SectionTallies]

# ==================== SCHEMAS DE RESPOSTA ====================

class ErrorResponse(BaseModel):
    """Schema para resposta de erro."""
    error: Any
    status_code: int
    timestamp: datetime = Field(default_factory=datetime.utcnow)
