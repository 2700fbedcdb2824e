from ..domain.entities import Account, Role
from .use_cases.login_account import ITokenIssuer, LoginAccount
from .use_cases.register_account import IAccountRepository, IPasswordHasher, RegisterAccount


class CredentialService:
    """Registration and login for both account stores, selected by role."""

    def __init__(
        self,
        accounts: dict[Role, IAccountRepository],
        hasher: IPasswordHasher,
        tokens: ITokenIssuer,
    ):
        self.accounts = accounts
        self.hasher = hasher
        self.tokens = tokens

    def register(self, role: Role, name: str, email: str, password: str) -> Account:
        uc = RegisterAccount(repo=self.accounts[role], hasher=self.hasher)
        return uc.execute(name, email, password)

    def login(self, role: Role, email: str, password: str) -> str:
        uc = LoginAccount(repo=self.accounts[role], hasher=self.hasher, tokens=self.tokens)
        return uc.execute(email, password)
