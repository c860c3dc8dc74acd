from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from learnhub.database import Base
from learnhub.models.types import JSONText

ROLES = ("student", "instructor", "admin")


def default_stats():
    return {
        "ideas_refined": 0,
        "interviews_completed": 0,
        "total_practice_time": 0,
        "average_score": 0,
    }


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), default="student", nullable=False)  # student, instructor, admin

    # Documents stored as JSON text
    profile = Column(JSONText(), default=dict)
    preferences = Column(JSONText(), default=dict)
    stats = Column(JSONText(), default=default_stats)

    # Status
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)

    # Compare-and-swap counter for ORM updates
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    ideas = relationship("Idea", back_populates="user", cascade="all, delete-orphan")
    interviews = relationship("Interview", back_populates="user", cascade="all, delete-orphan")

    __mapper_args__ = {"version_id_col": version}
