"""
Password strength validation.

Registration passwords need every character class: an uppercase letter,
a lowercase letter, a digit and a special character.

Example:
    from common.utils import validate_password

    is_valid, errors = validate_password("weakpass")
    if not is_valid:
        print("Password errors:", errors)
"""

import re
from typing import List, Tuple

SPECIAL_CHARS = r"!@#$%^&*()_+-=[]{};':\"\\|,.<>/?`~"

# (pattern, message) pairs checked in order
CHARACTER_RULES = (
    (r"[A-Z]", "Password must contain at least one uppercase letter"),
    (r"[a-z]", "Password must contain at least one lowercase letter"),
    (r"\d", "Password must contain at least one digit"),
    (f"[{re.escape(SPECIAL_CHARS)}]", "Password must contain at least one special character"),
)


def validate_password(password: str, min_length: int = 8) -> Tuple[bool, List[str]]:
    """
    Check a password against the registration rules.

    Returns:
        Tuple of (is_valid, errors); errors lists every rule that failed

    Examples:
        >>> validate_password("Passw0rd!")
        (True, [])
    """
    errors: List[str] = []

    if len(password) < min_length:
        errors.append(f"Password must be at least {min_length} characters")

    errors.extend(message for pattern, message in CHARACTER_RULES if not re.search(pattern, password))

    return not errors, errors
