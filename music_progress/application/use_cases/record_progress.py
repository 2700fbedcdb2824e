import structlog

from ...domain.entities import Lesson, ProgressEntry
from ...domain.errors import NotFound

logger = structlog.get_logger()


class ILessonRepository:
    def create(self, title: str, description: str) -> Lesson: ...
    def get_all(self) -> list[Lesson]: ...
    def find_by_id(self, lesson_id: int) -> Lesson | None: ...


class IProgressRepository:
    def add_progress(self, student_id: int, lesson_id: int) -> ProgressEntry: ...
    def get_student_progress(self, student_id: int) -> list[ProgressEntry]: ...
    def get_all(self) -> list[ProgressEntry]: ...
    def count(self) -> int: ...


class RecordProgress:
    """Append a completion to the ledger once the lesson is known to exist.

    The student id is not checked against the student store.
    """

    def __init__(self, lessons: ILessonRepository, ledger: IProgressRepository):
        self.lessons = lessons
        self.ledger = ledger

    def execute(self, student_id: int, lesson_id: int) -> ProgressEntry:
        if self.lessons.find_by_id(lesson_id) is None:
            raise NotFound("Lesson not found")
        entry = self.ledger.add_progress(student_id, lesson_id)
        logger.info("progress_recorded", student_id=student_id, lesson_id=lesson_id)
        return entry
