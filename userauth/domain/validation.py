import re
from typing import Callable

from .entities import AccountCandidate
from .violations import Violation

NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6

# local@label(.label)*.tld, "+" допустим только в локальной части
EMAIL_RE = re.compile(r"[A-Za-z0-9._+\-]+@(?:[A-Za-z0-9\-]+\.)+[A-Za-z]{2,}")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_RE.fullmatch(email.strip()) is not None


def validate(
    candidate: AccountCandidate,
    exists_with_email: Callable[[str], bool],
) -> list[Violation]:
    """Проверяет кандидата и возвращает все нарушения (пустой список = валиден).

    Правила не прерывают друг друга, чтобы форма могла подсветить все поля сразу.
    `exists_with_email` вызывается ровно один раз с нормализованным email.
    """
    violations: list[Violation] = []

    name = (candidate.name or "").strip()
    if not name:
        violations.append(Violation.NAME_BLANK)
    if len(name) > NAME_MAX_LENGTH:
        violations.append(Violation.NAME_TOO_LONG)

    email = (candidate.email or "").strip()
    if not email:
        violations.append(Violation.EMAIL_BLANK)
    elif not is_valid_email(email):
        violations.append(Violation.EMAIL_INVALID_FORMAT)
    if exists_with_email(normalize_email(email)):
        violations.append(Violation.EMAIL_TAKEN)

    password = candidate.password
    if password is None or not password.strip():
        violations.append(Violation.PASSWORD_BLANK)
    if len(password or "") < PASSWORD_MIN_LENGTH:
        violations.append(Violation.PASSWORD_TOO_SHORT)

    confirmation = candidate.password_confirmation
    if confirmation is None or confirmation != password:
        violations.append(Violation.PASSWORD_CONFIRMATION_MISMATCH)

    return violations
