from slowapi import Limiter
from slowapi.util import get_remote_address

from lexicon.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["300/minute"] if settings.ENVIRONMENT != "local" else [],
    enabled=settings.ENVIRONMENT != "local",
)

# Login is the only credential-checking endpoint
AUTH_RATE_LIMIT = "5/minute"

# Exports rebuild whole language trees on a cache miss
EXPORT_RATE_LIMIT = "60/minute"
