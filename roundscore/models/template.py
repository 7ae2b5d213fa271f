from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from roundscore.database import Base


class CompanyTemplate(Base):
    __tablename__ = "company_templates"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String(255), nullable=False)
    company_logo = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)

    # List of round dicts: id, name, type, duration, question_bank_id, ...
    rounds = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationship
    interviews = relationship(
        "CompanyInterview", back_populates="template", cascade="all, delete-orphan"
    )

    def find_round(self, round_id: str):
        """Return the round dict with the given id, or None."""
        for round_data in self.rounds or []:
            if round_data.get("id") == round_id:
                return round_data
        return None
