from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from roundscore.database import Base


class CompanyInterview(Base):
    __tablename__ = "company_interviews"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, ForeignKey("company_templates.id"), nullable=False)
    company_name = Column(String(255), nullable=False)
    user_id = Column(String(64), nullable=False, index=True)

    # Round ids the user has finished, in completion order
    completed_rounds = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    template = relationship("CompanyTemplate", back_populates="interviews")
    round_feedback = relationship(
        "RoundFeedbackRecord", back_populates="interview", cascade="all, delete-orphan"
    )
