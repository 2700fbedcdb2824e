from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from ..config import Settings


def build_limiter(settings: Settings) -> Limiter:
    """One limiter (and one counter storage) per application instance."""
    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        enabled=settings.RATE_LIMIT_ENABLED,
    )


def register_limit(settings: Settings) -> str:
    return f"{settings.RATE_LIMIT_PER_MINUTE}/minute"


def login_limit(settings: Settings) -> str:
    # Более строгий лимит для логина (защита от брутфорса)
    return f"{settings.LOGIN_RATE_LIMIT_PER_MINUTE}/minute"


def hit(limiter: Limiter, request: Request, scope: str, limit_value: str) -> bool:
    """Count one request against ``limit_value``; False once the limit is exceeded."""
    if not limiter.enabled:
        return True
    return limiter.limiter.hit(parse(limit_value), scope, get_remote_address(request))
