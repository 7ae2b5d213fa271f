from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from roundscore.database import Base


class QuestionBank(Base):
    __tablename__ = "question_banks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=False)  # aptitude, coding, text
    difficulty = Column(String(20), default="mixed")  # easy, medium, hard, mixed
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationship
    questions = relationship(
        "QuestionRecord",
        back_populates="bank",
        cascade="all, delete-orphan",
        order_by="QuestionRecord.id",
    )


class QuestionRecord(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    bank_id = Column(Integer, ForeignKey("question_banks.id"), nullable=False, index=True)

    text = Column(Text, nullable=False)
    type = Column(String(10), nullable=False)  # mcq, text, code
    options = Column(JSON, nullable=True)
    correct_answer = Column(JSON, nullable=True)  # option index or option text
    test_cases = Column(JSON, nullable=True)
    difficulty = Column(String(20), nullable=True)
    points = Column(Integer, default=1)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationship
    bank = relationship("QuestionBank", back_populates="questions")
