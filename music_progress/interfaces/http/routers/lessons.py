import structlog
from fastapi import APIRouter, Depends, status

from ....domain.entities import Principal
from ....infrastructure.registry import Registry
from ..authz import get_principal, get_registry, require_instructor
from ..schemas import LessonCreate, LessonOut, lesson_out

logger = structlog.get_logger()

router = APIRouter(prefix="/lessons", tags=["lessons"])

@router.post("", response_model=LessonOut, status_code=status.HTTP_201_CREATED)
def create_lesson(
    payload: LessonCreate,
    principal: Principal = Depends(require_instructor),
    registry: Registry = Depends(get_registry),
):
    lesson = registry.lessons.create(payload.title, payload.description)
    logger.info("lesson_created", lesson_id=lesson.id, instructor_id=principal.id)
    return lesson_out(lesson)

@router.get("", response_model=list[LessonOut], dependencies=[Depends(get_principal)])
def list_lessons(registry: Registry = Depends(get_registry)):
    return [lesson_out(lesson) for lesson in registry.lessons.get_all()]
