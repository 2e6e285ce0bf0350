import structlog

from ...domain.entities import Account, AccountCandidate
from ...domain.errors import ValidationFailure
from ...domain.validation import normalize_email, validate
from ...infrastructure.metrics import account_registrations_total

logger = structlog.get_logger()

class IAccountRepository:
    def exists(self, normalized_email: str) -> bool: ...
    def find_by_normalized_email(self, normalized_email: str) -> Account | None: ...
    def get(self, account_id: int) -> Account | None: ...
    def insert(self, account: Account) -> Account: ...
    def update(self, account: Account) -> Account: ...

class IPasswordHasher:
    def digest(self, plain: str) -> str: ...
    def verify(self, plain: str, digest: str) -> bool: ...

class RegisterAccount:
    def __init__(self, repo: IAccountRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, candidate: AccountCandidate) -> Account:
        violations = validate(candidate, self.repo.exists)
        if violations:
            account_registrations_total.labels(outcome="rejected").inc()
            logger.info("registration_rejected", violations=[v.value for v in violations])
            raise ValidationFailure(violations)

        account = Account(
            id=None,
            name=candidate.name.strip(),
            email=candidate.email.strip(),
            password_digest=self.hasher.digest(candidate.password),
        )
        try:
            created = self.repo.insert(account)
        except ValidationFailure:
            # гонка: уникальный индекс сработал после нашей проверки
            account_registrations_total.labels(outcome="rejected").inc()
            logger.info("registration_rejected", violations=["email_taken"], race=True)
            raise
        account_registrations_total.labels(outcome="created").inc()
        logger.info("account_registered", account_id=created.id, email=normalize_email(created.email))
        return created
