from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from .models import AccountORM
from ..domain.entities import Account
from ..domain.errors import AccountNotFound, ValidationFailure
from ..domain.validation import normalize_email
from ..domain.violations import Violation
from ..application.use_cases.register_account import IAccountRepository

def to_domain(row: AccountORM) -> Account:
    return Account(
        id=row.id,
        name=row.name,
        email=row.email,
        password_digest=row.password_digest,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )

class AccountRepository(IAccountRepository):
    def __init__(self, db: Session): self.db = db

    def exists(self, normalized_email: str) -> bool:
        row = self.db.query(AccountORM.id).filter(AccountORM.email_normalized == normalized_email).first()
        return row is not None

    def find_by_normalized_email(self, normalized_email: str) -> Account | None:
        row = self.db.query(AccountORM).filter(AccountORM.email_normalized == normalized_email).first()
        return to_domain(row) if row else None

    def get(self, account_id: int) -> Account | None:
        row = self.db.get(AccountORM, account_id)
        return to_domain(row) if row else None

    def insert(self, account: Account) -> Account:
        now = datetime.now(timezone.utc)
        row = AccountORM(
            name=account.name,
            email=account.email,
            email_normalized=normalize_email(account.email),
            password_digest=account.password_digest,
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            # уникальный индекс по email_normalized
            self.db.rollback()
            raise ValidationFailure([Violation.EMAIL_TAKEN])
        self.db.refresh(row)
        return to_domain(row)

    def update(self, account: Account) -> Account:
        row = self.db.get(AccountORM, account.id)
        if row is None:
            raise AccountNotFound(account.id)
        row.name = account.name
        row.email = account.email
        row.email_normalized = normalize_email(account.email)
        row.password_digest = account.password_digest
        row.updated_at = datetime.now(timezone.utc)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationFailure([Violation.EMAIL_TAKEN])
        self.db.refresh(row)
        return to_domain(row)
