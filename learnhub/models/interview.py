from sqlalchemy import Column, Integer, String, DateTime, Boolean, Float, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from learnhub.database import Base
from learnhub.models.types import JSONText

MODES = ("ai-interviewer", "scenario-based", "custom")
INTERVIEW_STATUSES = ("draft", "in-progress", "completed")


class Interview(Base):
    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    mode = Column(String(20), nullable=False)
    configuration = Column(JSONText(), default=dict)  # role, experience_level, duration, ...

    questions = Column(JSONText(list), default=list)
    responses = Column(JSONText(list), default=list)  # append-only

    score = Column(Float, nullable=True)
    feedback = Column(JSONText(), default=dict)

    # Status tracking: draft -> in-progress -> completed
    status = Column(String(20), default="draft", nullable=False)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds between start and completion

    tags = Column(JSONText(list), default=list)
    is_public = Column(Boolean, default=False)

    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="interviews")

    __mapper_args__ = {"version_id_col": version}
