from dataclasses import dataclass
from datetime import datetime


@dataclass
class AccountCandidate:
    name: str | None
    email: str | None
    password: str | None
    password_confirmation: str | None = None


@dataclass(frozen=True)
class Account:
    id: int | None
    name: str
    email: str
    password_digest: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def normalized_email(self) -> str:
        return self.email.strip().lower()
