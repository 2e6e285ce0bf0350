from functools import lru_cache
from typing import Callable

from passlib.context import CryptContext

from ..config import settings
from ..domain.entities import Account
from ..domain.errors import InvalidInput
from .metrics import password_digest_seconds


def build_context(
    scheme: str = settings.PASSWORD_SCHEME,
    rounds: int = settings.PASSWORD_ROUNDS,
    legacy_schemes: list[str] | None = None,
) -> CryptContext:
    # первая схема используется для новых дайджестов, остальные только проверяются
    if legacy_schemes is None:
        legacy_schemes = settings.PASSWORD_LEGACY_SCHEMES
    schemes = [scheme] + [s for s in legacy_schemes if s != scheme]
    options = {f"{scheme}__rounds": rounds}
    if scheme in ("bcrypt", "bcrypt_sha256"):
        options[f"{scheme}__truncate_error"] = False
    return CryptContext(schemes=schemes, deprecated="auto", **options)


class CredentialStore:
    """Хэширование и проверка паролей.

    Соль и стоимость хранятся внутри дайджеста, поэтому два дайджеста одного
    пароля различаются, но оба проходят `verify`.
    """

    def __init__(self, context: CryptContext | None = None, equalize_timing: bool = False):
        self.pwd = context or build_context()
        self.equalize_timing = equalize_timing
        # дайджест для несуществующих email считается заранее, а не при первом входе
        self._dummy_digest = self.pwd.hash("unused-dummy-password") if equalize_timing else None

    def digest(self, plain: str) -> str:
        if not isinstance(plain, str):
            raise InvalidInput("Password to digest must be a string")
        with password_digest_seconds.time():
            return self.pwd.hash(plain)

    def verify(self, plain: str, digest: str) -> bool:
        if not isinstance(plain, str) or not digest:
            return False
        try:
            return self.pwd.verify(plain, digest)
        except (ValueError, TypeError):
            # битый или чужой формат дайджеста
            return False

    def needs_rehash(self, digest: str) -> bool:
        try:
            return self.pwd.needs_update(digest)
        except (ValueError, TypeError):
            return False

    def authenticate(
        self,
        normalized_email: str,
        plain: str,
        lookup: Callable[[str], Account | None],
    ) -> Account | None:
        account = lookup(normalized_email)
        if account is None:
            if self.equalize_timing:
                self.verify(plain, self._dummy_digest)
            return None
        if not self.verify(plain, account.password_digest):
            return None
        return account


@lru_cache
def get_credential_store() -> CredentialStore:
    return CredentialStore(equalize_timing=settings.AUTH_EQUALIZE_TIMING)
