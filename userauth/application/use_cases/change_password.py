import structlog
from dataclasses import replace

from ...domain.entities import Account, AccountCandidate
from ...domain.errors import AccountNotFound, ValidationFailure
from ...domain.validation import validate
from .register_account import IAccountRepository, IPasswordHasher

logger = structlog.get_logger()

class ChangePassword:
    """Смена пароля: тот же конвейер проверка -> дайджест, затем update."""

    def __init__(self, repo: IAccountRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, account_id: int, password: str | None, password_confirmation: str | None) -> Account:
        account = self.repo.get(account_id)
        if account is None:
            raise AccountNotFound(account_id)

        candidate = AccountCandidate(
            name=account.name,
            email=account.email,
            password=password,
            password_confirmation=password_confirmation,
        )
        own_email = account.normalized_email
        violations = validate(candidate, lambda e: e != own_email and self.repo.exists(e))
        if violations:
            logger.info("password_change_rejected", account_id=account_id, violations=[v.value for v in violations])
            raise ValidationFailure(violations)

        updated = self.repo.update(replace(account, password_digest=self.hasher.digest(password)))
        logger.info("password_changed", account_id=updated.id)
        return updated
