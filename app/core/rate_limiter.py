from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger

from app.core.config import settings


# ----------------------------------------------------------------
# 1. CLIENT IP IDENTIFICATION
# ----------------------------------------------------------------
def get_real_ip(request):
    """
    Identify the client IP behind proxies.
    Checks X-Forwarded-For first, then X-Real-IP.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Leftmost IP is the actual client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


# ----------------------------------------------------------------
# 2. INITIALIZE LIMITER
# ----------------------------------------------------------------
if settings.RATE_LIMIT_STORAGE_URI:
    logger.info("Initializing rate limiter with shared storage")
    limiter = Limiter(
        key_func=get_real_ip,
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )
else:
    logger.info("RATE_LIMIT_STORAGE_URI not set. Using in-memory rate limiting.")
    limiter = Limiter(key_func=get_real_ip, enabled=settings.RATE_LIMIT_ENABLED)
