from fastapi import APIRouter, Depends, status

from ....domain.entities import Role
from ....domain.errors import InvalidCredentials
from ....infrastructure.metrics import accounts_registered_total, logins_total
from ....infrastructure.rate_limit import login_limit, register_limit
from ....infrastructure.registry import Registry
from ..authz import get_registry, require_instructor
from ..schemas import AccountOut, LoginReq, RegisterReq, TokenResp, account_out
from ..throttling import rate_limit

router = APIRouter(prefix="/instructors", tags=["instructors"])

@router.post(
    "/register",
    response_model=AccountOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("instructors:register", register_limit))],
)
def register(payload: RegisterReq, registry: Registry = Depends(get_registry)):
    account = registry.credentials.register(Role.INSTRUCTOR, payload.name, payload.email, payload.password)
    accounts_registered_total.labels(role=Role.INSTRUCTOR.value).inc()
    return account_out(account)

@router.post(
    "/login",
    response_model=TokenResp,
    dependencies=[Depends(rate_limit("instructors:login", login_limit))],
)
def login(payload: LoginReq, registry: Registry = Depends(get_registry)):
    try:
        token = registry.credentials.login(Role.INSTRUCTOR, payload.email, payload.password)
    except InvalidCredentials:
        logins_total.labels(role=Role.INSTRUCTOR.value, outcome="failure").inc()
        raise
    logins_total.labels(role=Role.INSTRUCTOR.value, outcome="success").inc()
    return TokenResp(token=token)

@router.get("", response_model=list[AccountOut], dependencies=[Depends(require_instructor)])
def list_instructors(registry: Registry = Depends(get_registry)):
    return [account_out(a) for a in registry.instructors.get_all()]
