# Database module
from .database import Base, SessionLocal, engine, get_db
from .models import Company, Job, Recruiter

__all__ = ["get_db", "engine", "SessionLocal", "Base", "Company", "Job", "Recruiter"]
