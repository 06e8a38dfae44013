from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    job_title = Column(String(150), nullable=False)
    location = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    created_on = Column(DateTime(timezone=True), server_default=func.now())

    # Deleting a job also removes its applications at ORM level.
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
