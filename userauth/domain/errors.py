from .violations import Violation


class ValidationFailure(ValueError):
    """Кандидат не прошёл проверку; содержит все найденные нарушения."""

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        super().__init__(", ".join(v.value for v in self.violations) or "invalid")


class InvalidInput(ValueError):
    """Ошибка вызова (например, пароль None), а не ошибка пользователя."""


class AccountNotFound(LookupError):
    pass
