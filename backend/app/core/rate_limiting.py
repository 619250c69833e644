"""
Rate limiting configuration and utilities
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, status
from fastapi.responses import JSONResponse
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

# Create rate limiter instance
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000/day", "200/hour"],
    enabled=settings.RATE_LIMIT_ENABLED
)

# Custom rate limit exceeded handler
def custom_rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Custom handler for rate limit exceeded"""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"ok": False, "error": f"Too many requests. Limit: {exc.detail}"}
    )

# Rate limit configurations
RATE_LIMITS = {
    "upload": "20/minute",           # uploads write a blob and a job row
    "chat": "30/minute",             # each question is one model call
    "summarize": "10/minute",        # direct summaries are synchronous model calls
    "worker": "60/minute",           # process-job triggers
    "status": "120/minute",          # polling
}
