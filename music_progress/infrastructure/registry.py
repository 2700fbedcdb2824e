from dataclasses import dataclass

from ..application.credentials import CredentialService
from ..application.use_cases.record_progress import ILessonRepository, IProgressRepository
from ..application.use_cases.register_account import IAccountRepository
from ..config import Settings
from ..domain.entities import Role
from .memory import InMemoryAccountStore, InMemoryLessonCatalog, InMemoryProgressLedger
from .security import PasswordHasher, TokenService, utcnow


@dataclass
class Registry:
    """Stores and services shared by all requests for the life of the process."""
    instructors: IAccountRepository
    students: IAccountRepository
    lessons: ILessonRepository
    progress: IProgressRepository
    tokens: TokenService
    credentials: CredentialService


def build_registry(settings: Settings, clock=utcnow) -> Registry:
    """Build every store and service once; ``clock`` stamps tokens and progress entries."""
    if settings.STORAGE_BACKEND == "sql":
        from .db import build_engine, build_session_factory
        from .models import Base
        from .repositories import SqlAccountRepository, SqlLessonRepository, SqlProgressRepository

        engine = build_engine(settings.DATABASE_URL)
        Base.metadata.create_all(bind=engine)
        session_factory = build_session_factory(engine)
        instructors = SqlAccountRepository(session_factory, Role.INSTRUCTOR)
        students = SqlAccountRepository(session_factory, Role.STUDENT)
        lessons = SqlLessonRepository(session_factory)
        progress = SqlProgressRepository(session_factory, clock=clock)
    else:
        instructors = InMemoryAccountStore(Role.INSTRUCTOR)
        students = InMemoryAccountStore(Role.STUDENT)
        lessons = InMemoryLessonCatalog()
        progress = InMemoryProgressLedger(clock=clock)

    tokens = TokenService(
        secret=settings.signing_secret,
        algorithm=settings.JWT_ALGORITHM,
        ttl_seconds=settings.TOKEN_TTL_SECONDS,
        clock=clock,
    )
    credentials = CredentialService(
        accounts={Role.INSTRUCTOR: instructors, Role.STUDENT: students},
        hasher=PasswordHasher(settings.PASSWORD_SCHEMES),
        tokens=tokens,
    )
    return Registry(
        instructors=instructors,
        students=students,
        lessons=lessons,
        progress=progress,
        tokens=tokens,
        credentials=credentials,
    )
