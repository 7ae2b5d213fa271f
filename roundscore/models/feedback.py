from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from roundscore.database import Base


class RoundFeedbackRecord(Base):
    """One submitted attempt of a round. Earlier attempts are kept for history."""

    __tablename__ = "round_feedback"
    __table_args__ = (
        UniqueConstraint("interview_id", "user_id", "round_id", "attempt", name="uq_round_feedback_attempt"),
    )

    id = Column(Integer, primary_key=True, index=True)
    interview_id = Column(Integer, ForeignKey("company_interviews.id"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    template_id = Column(Integer, nullable=False)

    # Round info (copied from the template at submission time)
    round_id = Column(String(100), nullable=False, index=True)
    round_name = Column(String(255), nullable=False)
    round_type = Column(String(20), nullable=True)  # aptitude, code, voice, text
    attempt = Column(Integer, nullable=False, default=1)

    # Result
    total_score = Column(Integer, nullable=False, default=0)  # 0-100
    passing_score = Column(Integer, nullable=True)
    passed = Column(Boolean, nullable=True)

    # Feedback content
    category_scores = Column(JSON, nullable=False, default=list)
    strengths = Column(JSON, nullable=False, default=list)
    areas_for_improvement = Column(JSON, nullable=False, default=list)
    final_assessment = Column(Text, nullable=True)

    # Submitted answers (list of UserAnswer dicts)
    answers = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationship
    interview = relationship("CompanyInterview", back_populates="round_feedback")
