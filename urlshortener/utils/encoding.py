import secrets

from urlshortener.core.config import settings

# Base36 alphabet (lowercase only, safe in any URL path segment)
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
SHORT_CODE_LENGTH = settings.SHORT_CODE_LENGTH


def generate_short_code(length: int = SHORT_CODE_LENGTH) -> str:
    """Generate a cryptographically secure random lowercase base36 code."""
    if length < 1:
        raise ValueError("Short code length must be positive")
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
