from fastapi import APIRouter, Depends, status

from ....domain.entities import Role
from ....domain.errors import InvalidCredentials
from ....infrastructure.metrics import accounts_registered_total, logins_total
from ....infrastructure.rate_limit import login_limit, register_limit
from ....infrastructure.registry import Registry
from ..authz import get_registry, require_instructor, require_student
from ..schemas import (
    AccountOut, LoginReq, ProgressOut, RegisterReq, TokenResp, account_out, progress_out,
)
from ..throttling import rate_limit

router = APIRouter(prefix="/students", tags=["students"])

@router.post(
    "/register",
    response_model=AccountOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("students:register", register_limit))],
)
def register(payload: RegisterReq, registry: Registry = Depends(get_registry)):
    account = registry.credentials.register(Role.STUDENT, payload.name, payload.email, payload.password)
    accounts_registered_total.labels(role=Role.STUDENT.value).inc()
    return account_out(account)

@router.post(
    "/login",
    response_model=TokenResp,
    dependencies=[Depends(rate_limit("students:login", login_limit))],
)
def login(payload: LoginReq, registry: Registry = Depends(get_registry)):
    try:
        token = registry.credentials.login(Role.STUDENT, payload.email, payload.password)
    except InvalidCredentials:
        logins_total.labels(role=Role.STUDENT.value, outcome="failure").inc()
        raise
    logins_total.labels(role=Role.STUDENT.value, outcome="success").inc()
    return TokenResp(token=token)

@router.get("", response_model=list[AccountOut], dependencies=[Depends(require_instructor)])
def list_students(registry: Registry = Depends(get_registry)):
    return [account_out(a) for a in registry.students.get_all()]

# любой студент может читать прогресс по id, проверки владельца нет
@router.get("/progress/{student_id}", response_model=list[ProgressOut], dependencies=[Depends(require_student)])
def student_progress(student_id: int, registry: Registry = Depends(get_registry)):
    return [progress_out(e) for e in registry.progress.get_student_progress(student_id)]
