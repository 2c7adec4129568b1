"""Database models."""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from careerstudio.schemas.job import ExperienceLevel, JobType, WorkPolicy

from .database import Base


class Recruiter(Base):
    """Recruiter account; owns at most one company."""

    __tablename__ = "recruiters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    company = relationship("Company", back_populates="recruiter", uselist=False)

    def to_dict(self) -> dict:
        return {"id": str(self.id), "email": self.email}


class Company(Base):
    """Company careers page.

    Theme, legacy content, social links and the section collection are
    embedded JSON documents owned by the row.
    """

    __tablename__ = "companies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    recruiter_id = Column(Uuid, ForeignKey("recruiters.id"), unique=True, nullable=False)

    # Branding (profile)
    logo_url = Column(String(500), default="", nullable=False)
    banner_url = Column(String(500), default="", nullable=False)
    description = Column(Text, default="", nullable=False)
    social_links_json = Column(JSON, nullable=True)

    # Page documents (NULL means defaults)
    theme_json = Column(JSON, nullable=True)
    content_json = Column(JSON, nullable=True)
    sections_json = Column(JSON, nullable=True)

    # Incremented on every update; checked when the client sends one
    version = Column(Integer, default=1, nullable=False)

    recruiter = relationship("Recruiter", back_populates="company")
    jobs = relationship("Job", back_populates="company", order_by="Job.created_at.desc()")


class Job(Base):
    """Job posting of a company."""

    __tablename__ = "jobs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    title = Column(String(255), nullable=False, index=True)
    location = Column(String(255), nullable=False)
    job_type = Column(Enum(JobType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    description = Column(Text, nullable=False)

    work_policy = Column(
        Enum(WorkPolicy, values_callable=lambda e: [m.value for m in e]),
        default=WorkPolicy.ON_SITE,
        nullable=False,
    )
    department = Column(String(120), nullable=True)
    experience_level = Column(
        Enum(ExperienceLevel, values_callable=lambda e: [m.value for m in e]),
        default=ExperienceLevel.MID_LEVEL,
        nullable=False,
    )
    salary_range = Column(String(120), nullable=True)

    company = relationship("Company", back_populates="jobs")

    def to_dict(self) -> dict:
        """Convert model to dictionary."""
        return {
            "id": str(self.id),
            "companyId": str(self.company_id),
            "title": self.title,
            "location": self.location,
            "jobType": self.job_type.value if self.job_type else None,
            "description": self.description,
            "workPolicy": self.work_policy.value if self.work_policy else None,
            "department": self.department,
            "experienceLevel": self.experience_level.value if self.experience_level else None,
            "salaryRange": self.salary_range,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
