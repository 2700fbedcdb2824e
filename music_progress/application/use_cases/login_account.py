import structlog

from ...domain.entities import Account
from ...domain.errors import InvalidCredentials
from .register_account import IAccountRepository, IPasswordHasher

logger = structlog.get_logger()


class ITokenIssuer:
    def issue(self, account: Account) -> str: ...


class LoginAccount:
    def __init__(self, repo: IAccountRepository, hasher: IPasswordHasher, tokens: ITokenIssuer):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, email: str, password: str) -> str:
        account = self.repo.find_by_email(email)
        if not account or not self.hasher.verify(password, account.password):
            logger.info("login_failed", role=self.repo.role.value)
            raise InvalidCredentials()
        logger.info("login_succeeded", role=account.role.value, account_id=account.id)
        return self.tokens.issue(account)
