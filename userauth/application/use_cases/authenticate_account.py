import structlog
from dataclasses import replace

from ...domain.entities import Account
from ...domain.validation import normalize_email
from ...infrastructure.metrics import account_authentications_total
from ...infrastructure.security import CredentialStore
from .register_account import IAccountRepository

logger = structlog.get_logger()

class AuthenticateAccount:
    """Вход по email и паролю.

    Возвращает аккаунт или None; "нет такого email" и "неверный пароль"
    снаружи неразличимы.
    """

    def __init__(self, repo: IAccountRepository, store: CredentialStore):
        self.repo = repo
        self.store = store

    def execute(self, email: str, password: str) -> Account | None:
        normalized = normalize_email(email)
        account = self.store.authenticate(normalized, password, self.repo.find_by_normalized_email)
        if account is None:
            account_authentications_total.labels(outcome="failure").inc()
            logger.info("authentication_failed", email=normalized)
            return None

        account_authentications_total.labels(outcome="success").inc()
        if self.store.needs_rehash(account.password_digest):
            account = self.repo.update(replace(account, password_digest=self.store.digest(password)))
            logger.info("password_digest_upgraded", account_id=account.id)
        return account
