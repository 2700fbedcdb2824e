from ..application.use_cases.record_progress import ILessonRepository, IProgressRepository
from ..application.use_cases.register_account import IAccountRepository
from ..domain.entities import Account, Lesson, ProgressEntry, Role
from ..domain.errors import DuplicateAccount
from .locking import ReadWriteLock
from .security import utcnow


class InMemoryAccountStore(IAccountRepository):
    def __init__(self, role: Role):
        self.role = role
        self._lock = ReadWriteLock()
        self._rows: list[Account] = []
        self._by_email: dict[str, Account] = {}

    def create(self, name: str, email: str, password: str) -> Account:
        with self._lock.write():
            # повторная проверка под блокировкой записи
            if email in self._by_email:
                raise DuplicateAccount()
            account = Account(
                id=len(self._rows) + 1, name=name, email=email, password=password, role=self.role
            )
            self._rows.append(account)
            self._by_email[email] = account
            return account

    def find_by_email(self, email: str) -> Account | None:
        with self._lock.read():
            return self._by_email.get(email)

    def get_all(self) -> list[Account]:
        with self._lock.read():
            return list(self._rows)


class InMemoryLessonCatalog(ILessonRepository):
    def __init__(self):
        self._lock = ReadWriteLock()
        self._rows: list[Lesson] = []
        self._by_id: dict[int, Lesson] = {}

    def create(self, title: str, description: str) -> Lesson:
        with self._lock.write():
            lesson = Lesson(id=len(self._rows) + 1, title=title, description=description)
            self._rows.append(lesson)
            self._by_id[lesson.id] = lesson
            return lesson

    def get_all(self) -> list[Lesson]:
        with self._lock.read():
            return list(self._rows)

    def find_by_id(self, lesson_id: int) -> Lesson | None:
        with self._lock.read():
            return self._by_id.get(lesson_id)


class InMemoryProgressLedger(IProgressRepository):
    def __init__(self, clock=utcnow):
        self.clock = clock
        self._lock = ReadWriteLock()
        self._rows: list[ProgressEntry] = []
        self._by_student: dict[int, list[ProgressEntry]] = {}

    def add_progress(self, student_id: int, lesson_id: int) -> ProgressEntry:
        with self._lock.write():
            entry = ProgressEntry(student_id=student_id, lesson_id=lesson_id, completed_at=self.clock())
            self._rows.append(entry)
            self._by_student.setdefault(student_id, []).append(entry)
            return entry

    def get_student_progress(self, student_id: int) -> list[ProgressEntry]:
        with self._lock.read():
            return list(self._by_student.get(student_id, []))

    def get_all(self) -> list[ProgressEntry]:
        with self._lock.read():
            return list(self._rows)

    def count(self) -> int:
        with self._lock.read():
            return len(self._rows)
