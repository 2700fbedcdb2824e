from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..domain.entities import Account, Principal, Role
from ..domain.errors import InvalidToken


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordHasher:
    def __init__(self, schemes: list[str] | None = None):
        self.pwd = CryptContext(schemes=schemes or ["bcrypt_sha256"], deprecated="auto")

    def hash(self, plain: str) -> str: return self.pwd.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        try:
            return self.pwd.verify(plain, hashed)
        except ValueError:
            # хэш не распознан текущими схемами
            return False


class TokenService:
    """Issues and verifies HS256 access tokens carrying ``{id, role, iat, exp}``.

    Expiry is checked against ``clock`` (python-jose's own ``exp`` check is
    switched off), so a token issued at T is rejected from exactly T + ttl on.
    ``iat``/``exp`` keep the fractional second of the issue time.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def issue(self, account: Account) -> str:
        issued = self.clock()
        payload = {
            "id": account.id,
            "role": account.role.value,
            "iat": issued.timestamp(),
            # от datetime, а не iat + ttl: граница совпадает с clock() бит в бит
            "exp": (issued + timedelta(seconds=self.ttl_seconds)).timestamp(),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Principal:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                # require_* в python-jose снова включает verify_*
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidToken() from e

        iat, exp = claims.get("iat"), claims.get("exp")
        if not _is_number(iat) or not _is_number(exp):
            raise InvalidToken()
        if self.clock().timestamp() >= exp:
            raise InvalidToken()

        account_id = claims.get("id")
        if not isinstance(account_id, int) or isinstance(account_id, bool):
            raise InvalidToken()
        try:
            role = Role(claims.get("role"))
        except ValueError as e:
            raise InvalidToken() from e
        return Principal(id=account_id, role=role)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
