"""
Dependency injection utilities for FastAPI.

This module provides reusable dependencies for database sessions,
authentication, and upload checks.
"""

import logging
import secrets
from pathlib import Path
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from fastapi import Depends, HTTPException, Header, status

from api.config import settings
from services.repository import WeddingRepository

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    """Pool options; SQLite uses its own pool classes and rejects sizing."""
    if database_url.startswith('sqlite'):
        return {'connect_args': {'check_same_thread': False}}
    return {
        'pool_size': settings.DB_POOL_SIZE,
        'max_overflow': settings.DB_MAX_OVERFLOW,
        'pool_pre_ping': settings.DB_POOL_PRE_PING,
    }


# Create database engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL)
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields database session and ensures it's closed after use.

    Usage:
        @app.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            # Use db session
            pass
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_repository(db: Session = Depends(get_db)) -> WeddingRepository:
    """Repository bound to the request's database session."""
    return WeddingRepository(db)


def get_api_key(
    x_api_key: str = Header(None, alias=settings.API_KEY_HEADER)
) -> str:
    """
    Validate API key from header.

    Args:
        x_api_key: API key from request header

    Returns:
        Validated API key

    Raises:
        HTTPException: If API key is invalid or missing
    """
    if not settings.ENABLE_API_KEY_AUTH:
        # API key auth disabled - allow all requests
        return "public"

    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key required",
            headers={"WWW-Authenticate": "ApiKey"}
        )

    if not settings.ADMIN_API_KEY or not secrets.compare_digest(x_api_key, settings.ADMIN_API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "ApiKey"}
        )

    return x_api_key


def get_current_user(api_key: str = Depends(get_api_key)) -> str:
    """
    Get current admin identity from API key.

    Returns "public" when API key auth is disabled, otherwise "admin".
    """
    return "public" if api_key == "public" else "admin"


def verify_file_size(file_size: int) -> bool:
    """
    Verify uploaded file size is within limit.

    Raises:
        HTTPException: If file is too large
    """
    max_size_bytes = settings.MAX_FILE_SIZE_MB * 1024 * 1024

    if file_size > max_size_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File size ({file_size / 1024 / 1024:.1f} MB) exceeds maximum allowed "
                   f"({settings.MAX_FILE_SIZE_MB} MB)"
        )

    return True


def verify_file_extension(filename: str, prefix: str = '') -> bool:
    """
    Verify file has an allowed spreadsheet extension (case-insensitive).

    Raises:
        HTTPException: If extension is not allowed
    """
    ext = Path(filename or '').suffix.lower()

    if ext not in [e.lower() for e in settings.ALLOWED_EXTENSIONS]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{prefix}Please upload an Excel file ({' or '.join(settings.ALLOWED_EXTENSIONS)})"
        )

    return True
