# External package imports
import bcrypt


# bcrypt only consumes the first 72 bytes of a secret
BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_HASH_ROUNDS = 12


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(plain_password: str, rounds: int = DEFAULT_HASH_ROUNDS) -> str:
    """
    Hash a plain password using bcrypt

    Args:
        plain_password: The plain text password to hash
        rounds: bcrypt cost factor

    Returns:
        Hashed password string
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(_password_bytes(plain_password), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if passwords match, False otherwise
    """
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password),
            hashed_password.encode("utf-8")
        )
    except ValueError:
        # Not a bcrypt hash
        return False
