from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()

# ==================== MODELO DE SUBMISSÃO ====================

class PollSubmission(Base):
    """
    Uma resposta completa do questionário. Gravada uma vez, nunca alterada.
    Multi-select (q14, q16, q19) fica separado por vírgula.
    """
    __tablename__ = "poll_submissions"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(320), nullable=True)

    # Lifestyle Intelligence Index
    q0 = Column(String(255), nullable=True)
    q1 = Column(String(255), nullable=True)
    q2 = Column(String(255), nullable=True)
    q3 = Column(String(255), nullable=True)
    q4 = Column(String(255), nullable=True)
    q5 = Column(String(255), nullable=True)
    q6 = Column(String(255), nullable=True)
    # Household & Life Stage
    q7 = Column(String(255), nullable=True)
    q8 = Column(String(255), nullable=True)
    q9 = Column(String(255), nullable=True)
    q9_ages = Column(String(255), nullable=True)
    # Age & Work Stage
    q10 = Column(String(255), nullable=True)
    q11 = Column(String(255), nullable=True)
    # Availability
    q12 = Column(String(255), nullable=True)
    q13 = Column(String(255), nullable=True)
    # Wellness
    q14 = Column(String(512), nullable=True)
    q15 = Column(String(255), nullable=True)
    # Lifestyle Interests
    q16 = Column(String(512), nullable=True)
    q17 = Column(String(255), nullable=True)
    # Pets & Hobbies
    q18 = Column(String(255), nullable=True)
    q18_other = Column(String(255), nullable=True)
    q19 = Column(String(512), nullable=True)
    # Communication
    q20 = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<PollSubmission(id={self.id}, created_at={self.created_at})>"
