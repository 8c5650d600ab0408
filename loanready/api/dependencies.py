"""Dependency injection for FastAPI endpoints"""

import uuid
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session
from loanready.infrastructure.database.session import get_db
from loanready.services.profile_completion import ProfileCompletionService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_completion_service(db: Session = Depends(get_db)) -> ProfileCompletionService:
    """Provide completion service bound to the request's session"""
    return ProfileCompletionService(db)


def parse_uuid(value: str, label: str) -> uuid.UUID:
    """Parse a path identifier, rejecting malformed IDs with 400"""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")
