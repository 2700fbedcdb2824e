import structlog

from ...domain.entities import Account, Role
from ...domain.errors import DuplicateAccount

logger = structlog.get_logger()


class IAccountRepository:
    role: Role
    def create(self, name: str, email: str, password: str) -> Account: ...
    def find_by_email(self, email: str) -> Account | None: ...
    def get_all(self) -> list[Account]: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...


class RegisterAccount:
    def __init__(self, repo: IAccountRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, name: str, email: str, password: str) -> Account:
        if self.repo.find_by_email(email):
            raise DuplicateAccount()
        account = self.repo.create(name, email, self.hasher.hash(password))
        logger.info("account_registered", role=account.role.value, account_id=account.id)
        return account
