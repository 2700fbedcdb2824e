from typing import Callable

from fastapi import Depends, Request
from slowapi import Limiter

from ...config import Settings
from ...domain.errors import RateLimited
from ...infrastructure.rate_limit import hit


def get_limiter(request: Request) -> Limiter:
    return request.app.state.limiter


def rate_limit(scope: str, limit_for: Callable[[Settings], str]):
    def _check(request: Request, limiter: Limiter = Depends(get_limiter)) -> None:
        if not hit(limiter, request, scope, limit_for(request.app.state.settings)):
            raise RateLimited()
    return _check
