import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...domain.entities import Principal, Role
from ...domain.errors import Forbidden, Unauthenticated
from ...infrastructure.registry import Registry

logger = structlog.get_logger()

# auto_error=False: отсутствие токена -> 401, а не 403 от HTTPBearer
bearer = HTTPBearer(auto_error=False)


def get_registry(request: Request) -> Registry:
    return request.app.state.registry


def get_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    registry: Registry = Depends(get_registry),
) -> Principal:
    if creds is None:
        raise Unauthenticated()
    principal = registry.tokens.decode(creds.credentials)
    request.state.principal = principal
    return principal


def require_role(role: Role):
    def _require(request: Request, principal: Principal = Depends(get_principal)) -> Principal:
        if principal.role is not role:
            logger.warning(
                "access_denied",
                path=request.url.path,
                required_role=role.value,
                role=principal.role.value,
            )
            raise Forbidden(f"Access restricted to {role.value}s")
        return principal
    return _require


require_instructor = require_role(Role.INSTRUCTOR)
require_student = require_role(Role.STUDENT)
