from passlib.context import CryptContext

from iain.config import MIN_PASSWORD_LENGTH

# Argon2 for every stored credential
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# Error codes raised by credential creation
EMAIL_ALREADY_IN_USE = "auth/email-already-in-use"
WEAK_PASSWORD = "auth/weak-password"

AUTH_ERROR_MESSAGES = {
    EMAIL_ALREADY_IN_USE: "This email is already registered.",
    WEAK_PASSWORD: "Password must be at least 6 characters.",
}


class AuthError(Exception):
    """Credential operation failed with a known error code."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    @property
    def message(self) -> str:
        return auth_error_message(self.code)


def auth_error_message(code: str, default: str = "Failed to create account.") -> str:
    """Map an auth error code to the message shown to staff."""
    return AUTH_ERROR_MESSAGES.get(code, default)


def verify_password(plain_password, hashed_password):
    """Checks if the typed password matches the saved hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def is_weak_password(password: str) -> bool:
    return len(password or "") < MIN_PASSWORD_LENGTH
