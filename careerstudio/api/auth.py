"""Recruiter authentication routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from careerstudio.core.logging import get_logger
from careerstudio.db import Recruiter, get_db
from careerstudio.schemas.auth import AuthResponse, Credentials, RecruiterRead, RegisterRequest
from careerstudio.services.auth import (
    authenticate,
    create_access_token,
    get_current_recruiter,
    register_recruiter,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(message: str, recruiter: Recruiter) -> dict:
    return AuthResponse(
        message=message,
        token=create_access_token(str(recruiter.id)),
        recruiter=RecruiterRead(**recruiter.to_dict()),
    ).model_dump()


@router.post("/register")
async def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Register a recruiter account and return a bearer token."""
    recruiter = register_recruiter(db, payload.email, payload.password)
    return JSONResponse(status_code=201, content=_auth_response("Registered", recruiter))


@router.post("/login")
async def login(payload: Credentials, db: Session = Depends(get_db)):
    """Exchange credentials for a bearer token."""
    recruiter = authenticate(db, payload.email, payload.password)
    logger.info(f"Recruiter {recruiter.id} logged in")
    return _auth_response("Logged in", recruiter)


@router.get("/me")
async def me(recruiter: Recruiter = Depends(get_current_recruiter)):
    return {"recruiter": recruiter.to_dict()}
