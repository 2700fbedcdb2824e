from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from ..application.use_cases.record_progress import ILessonRepository, IProgressRepository
from ..application.use_cases.register_account import IAccountRepository
from ..domain.entities import Account, Lesson, ProgressEntry, Role
from ..domain.errors import DuplicateAccount
from .locking import ReadWriteLock
from .models import InstructorORM, LessonORM, ProgressORM, StudentORM
from .security import utcnow

ACCOUNT_TABLES = {Role.INSTRUCTOR: InstructorORM, Role.STUDENT: StudentORM}


def _aware(dt: datetime) -> datetime:
    # SQLite возвращает naive datetime
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class SqlAccountRepository(IAccountRepository):
    def __init__(self, session_factory: sessionmaker, role: Role):
        self.session_factory = session_factory
        self.role = role
        self.orm = ACCOUNT_TABLES[role]
        self._lock = ReadWriteLock()

    def _to_domain(self, row) -> Account:
        return Account(id=row.id, name=row.name, email=row.email, password=row.password, role=self.role)

    def create(self, name: str, email: str, password: str) -> Account:
        with self._lock.write(), self.session_factory() as db:
            if db.scalar(select(self.orm.id).where(self.orm.email == email)) is not None:
                raise DuplicateAccount()
            count = db.scalar(select(func.count()).select_from(self.orm))
            row = self.orm(id=count + 1, name=name, email=email, password=password)
            db.add(row); db.commit(); db.refresh(row)
            return self._to_domain(row)

    def find_by_email(self, email: str) -> Account | None:
        with self._lock.read(), self.session_factory() as db:
            row = db.scalars(select(self.orm).where(self.orm.email == email)).first()
            return self._to_domain(row) if row else None

    def get_all(self) -> list[Account]:
        with self._lock.read(), self.session_factory() as db:
            return [self._to_domain(r) for r in db.scalars(select(self.orm).order_by(self.orm.id))]


class SqlLessonRepository(ILessonRepository):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self._lock = ReadWriteLock()

    @staticmethod
    def _to_domain(row: LessonORM) -> Lesson:
        return Lesson(id=row.id, title=row.title, description=row.description)

    def create(self, title: str, description: str) -> Lesson:
        with self._lock.write(), self.session_factory() as db:
            count = db.scalar(select(func.count()).select_from(LessonORM))
            row = LessonORM(id=count + 1, title=title, description=description)
            db.add(row); db.commit(); db.refresh(row)
            return self._to_domain(row)

    def get_all(self) -> list[Lesson]:
        with self._lock.read(), self.session_factory() as db:
            return [self._to_domain(r) for r in db.scalars(select(LessonORM).order_by(LessonORM.id))]

    def find_by_id(self, lesson_id: int) -> Lesson | None:
        with self._lock.read(), self.session_factory() as db:
            row = db.get(LessonORM, lesson_id)
            return self._to_domain(row) if row else None


class SqlProgressRepository(IProgressRepository):
    def __init__(self, session_factory: sessionmaker, clock=utcnow):
        self.session_factory = session_factory
        self.clock = clock
        self._lock = ReadWriteLock()

    @staticmethod
    def _to_domain(row: ProgressORM) -> ProgressEntry:
        return ProgressEntry(
            student_id=row.student_id, lesson_id=row.lesson_id, completed_at=_aware(row.completed_at)
        )

    def add_progress(self, student_id: int, lesson_id: int) -> ProgressEntry:
        with self._lock.write(), self.session_factory() as db:
            row = ProgressORM(student_id=student_id, lesson_id=lesson_id, completed_at=self.clock())
            db.add(row); db.commit(); db.refresh(row)
            return self._to_domain(row)

    def get_student_progress(self, student_id: int) -> list[ProgressEntry]:
        with self._lock.read(), self.session_factory() as db:
            q = select(ProgressORM).where(ProgressORM.student_id == student_id).order_by(ProgressORM.id)
            return [self._to_domain(r) for r in db.scalars(q)]

    def get_all(self) -> list[ProgressEntry]:
        with self._lock.read(), self.session_factory() as db:
            return [self._to_domain(r) for r in db.scalars(select(ProgressORM).order_by(ProgressORM.id))]

    def count(self) -> int:
        with self._lock.read(), self.session_factory() as db:
            return db.scalar(select(func.count()).select_from(ProgressORM))
