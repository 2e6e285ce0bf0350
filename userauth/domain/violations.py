from enum import Enum


class Violation(str, Enum):
    NAME_BLANK = "name_blank"
    NAME_TOO_LONG = "name_too_long"
    EMAIL_BLANK = "email_blank"
    EMAIL_INVALID_FORMAT = "email_invalid_format"
    EMAIL_TAKEN = "email_taken"
    PASSWORD_BLANK = "password_blank"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_CONFIRMATION_MISMATCH = "password_confirmation_mismatch"

    @property
    def field(self) -> str:
        if self is Violation.PASSWORD_CONFIRMATION_MISMATCH:
            return "password_confirmation"
        return self.value.split("_", 1)[0]

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    Violation.NAME_BLANK: "Name can't be blank",
    Violation.NAME_TOO_LONG: "Name is too long (maximum is 50 characters)",
    Violation.EMAIL_BLANK: "Email can't be blank",
    Violation.EMAIL_INVALID_FORMAT: "Email is invalid",
    Violation.EMAIL_TAKEN: "Email has already been taken",
    Violation.PASSWORD_BLANK: "Password can't be blank",
    Violation.PASSWORD_TOO_SHORT: "Password is too short (minimum is 6 characters)",
    Violation.PASSWORD_CONFIRMATION_MISMATCH: "Password confirmation doesn't match Password",
}
