from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from learnhub.database import Base
from learnhub.models.types import JSONText

CONTEXTS = ("hackathon", "startup", "presentation", "innovation", "other")
TONES = ("formal", "persuasive", "casual", "professional")
IDEA_STATUSES = ("draft", "processing", "completed", "error")


class Idea(Base):
    __tablename__ = "ideas"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    original_input = Column(Text, nullable=False)
    context = Column(String(20), nullable=False)

    # AI results, populated by the enrichment chain
    structured_content = Column(JSONText(), default=dict)
    feedback = Column(JSONText(), default=dict)
    outputs = Column(JSONText(), default=dict)
    ai_processing_time = Column(Integer, nullable=True)  # milliseconds

    customization = Column(JSONText(), default=dict)  # {"tone": ...}
    attachments = Column(JSONText(list), default=list)

    status = Column(String(20), default="draft", nullable=False)  # draft, processing, completed, error
    is_public = Column(Boolean, default=False)
    tags = Column(JSONText(list), default=list)
    views = Column(Integer, default=0, nullable=False)
    likes = Column(JSONText(list), default=list)

    # Compare-and-swap counter for ORM updates
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="ideas")

    __mapper_args__ = {"version_id_col": version}
