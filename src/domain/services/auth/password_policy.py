import re
from typing import List

from src.core.config.settings import (
    PASSWORD_MIN_LENGTH,
    PASSWORD_REQUIRE_DIGIT,
    PASSWORD_REQUIRE_LOWERCASE,
    PASSWORD_REQUIRE_SPECIAL_CHAR,
    PASSWORD_REQUIRE_UPPERCASE,
)


class PasswordPolicyValidator:
    """Validates passwords against a defined security policy.

    The policy requires passwords to meet minimum length, and include a mix of
    uppercase letters, lowercase letters, numbers, and special characters.
    Every rule is evaluated so the caller can report all failures at once.
    """

    SPECIAL_CHARACTERS = r"[!@#$%^&*(),.?:{}|<>_=\-+\[\];'/\\~`]"

    def __init__(
        self,
        min_length: int = PASSWORD_MIN_LENGTH,
        require_uppercase: bool = PASSWORD_REQUIRE_UPPERCASE,
        require_lowercase: bool = PASSWORD_REQUIRE_LOWERCASE,
        require_digit: bool = PASSWORD_REQUIRE_DIGIT,
        require_special_char: bool = PASSWORD_REQUIRE_SPECIAL_CHAR,
    ):
        self.min_length = min_length
        self.require_uppercase = require_uppercase
        self.require_lowercase = require_lowercase
        self.require_digit = require_digit
        self.require_special_char = require_special_char

    def violations(self, password: str) -> List[str]:
        """Returns one message per rule the password breaks, in rule order."""
        password = password or ""
        reasons = []
        if len(password) < self.min_length:
            reasons.append(f"Password must be at least {self.min_length} characters long.")
        if self.require_uppercase and not re.search(r"[A-Z]", password):
            reasons.append("Password must contain at least one uppercase letter.")
        if self.require_lowercase and not re.search(r"[a-z]", password):
            reasons.append("Password must contain at least one lowercase letter.")
        if self.require_digit and not re.search(r"\d", password):
            reasons.append("Password must contain at least one digit.")
        if self.require_special_char and not re.search(self.SPECIAL_CHARACTERS, password):
            reasons.append("Password must contain at least one special character.")
        return reasons
