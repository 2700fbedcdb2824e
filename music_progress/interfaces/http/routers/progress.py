from fastapi import APIRouter, Depends, status

from ....application.use_cases.record_progress import RecordProgress
from ....infrastructure.metrics import progress_entries_total
from ....infrastructure.registry import Registry
from ..authz import get_registry, require_instructor
from ..schemas import ProgressCreate, ProgressOut, progress_out

router = APIRouter(prefix="/progress", tags=["progress"], dependencies=[Depends(require_instructor)])

@router.post("", response_model=ProgressOut, status_code=status.HTTP_201_CREATED)
def add_progress(payload: ProgressCreate, registry: Registry = Depends(get_registry)):
    uc = RecordProgress(lessons=registry.lessons, ledger=registry.progress)
    entry = uc.execute(payload.student_id, payload.lesson_id)
    progress_entries_total.inc()
    return progress_out(entry)

@router.get("", response_model=list[ProgressOut])
def list_progress(registry: Registry = Depends(get_registry)):
    return [progress_out(e) for e in registry.progress.get_all()]
