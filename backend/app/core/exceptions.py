from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

class CaseBriefException(Exception):
    """Base exception for CaseBrief application"""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class ValidationError(CaseBriefException):
    """Raised when request input is rejected before any side effect"""
    def __init__(self, message: str = "Validation error", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message, status_code)

class NotFoundError(CaseBriefException):
    """Raised when a requested resource does not exist"""
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class JobNotFoundError(NotFoundError):
    """Raised when a job is not found"""
    def __init__(self, message: str = "Job not found"):
        super().__init__(message)

class JobStateError(CaseBriefException):
    """Raised when a job is not in the state an operation requires"""
    def __init__(self, message: str = "Job is not in the expected state"):
        super().__init__(message, status.HTTP_409_CONFLICT)

class StorageError(CaseBriefException):
    """Raised when the blob store or the job metadata write fails"""
    def __init__(self, message: str = "Storage error"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)

class ExtractionError(CaseBriefException):
    """Raised when no usable text can be extracted from a document"""
    def __init__(self, message: str = "no text extracted"):
        super().__init__(message, 422)

class UpstreamError(CaseBriefException):
    """Raised when the summarization service fails or times out"""
    def __init__(self, message: str = "Summarization service failed"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)

async def casebrief_exception_handler(request: Request, exc: CaseBriefException):
    """Handle custom CaseBrief exceptions"""
    if exc.status_code >= 500:
        logger.error(f"CaseBrief exception: {exc.message}")
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.message}
    )

async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render FastAPI request validation failures as client errors"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "error": message}
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render routing and framework HTTP errors in the API error shape"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )

async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle SQLAlchemy database exceptions"""
    logger.error(f"Database error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": "Database error occurred"}
    )

def _cors_headers(request: Request) -> dict:
    # This handler runs outside the CORS middleware
    origin = request.headers.get("origin")
    if origin and origin in settings.BACKEND_CORS_ORIGINS:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}

async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.exception(f"Unexpected error: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": "Internal server error"},
        headers=_cors_headers(request)
    )
