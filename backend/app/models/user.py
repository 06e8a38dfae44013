from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

USER_TYPE_JOB_SEEKER = 1
USER_TYPE_EMPLOYER = 2
USER_TYPES = {USER_TYPE_JOB_SEEKER, USER_TYPE_EMPLOYER}


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt digest, never the plaintext
    phone = Column(String(50), nullable=True)
    user_type = Column(Integer, nullable=False, default=USER_TYPE_JOB_SEEKER)
    created_on = Column(DateTime(timezone=True), server_default=func.now())

    applications = relationship("Application", back_populates="applicant", cascade="all, delete-orphan")
