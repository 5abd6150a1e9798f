import hashlib
import hmac
import secrets
from fastapi_jwt import JwtAccessBearer
from storefront.core.config import settings

PBKDF2_ITERATIONS = 100000


def hash_password(password: str) -> str:
    """Salted PBKDF2-SHA256 hash in the form ``salt$hexdigest``"""
    salt = secrets.token_hex(16)
    hash_obj = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        PBKDF2_ITERATIONS
    )
    return f"{salt}${hash_obj.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        salt, stored_hash = password_hash.split('$')
    except ValueError:
        return False

    hash_obj = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        PBKDF2_ITERATIONS
    )
    return hmac.compare_digest(hash_obj.hex(), stored_hash)


# Bearer token in the Authorization header; invalid or expired tokens are
# rejected by fastapi-jwt itself with a 401
access_security = JwtAccessBearer(
    secret_key=settings.SECRET_KEY,
    auto_error=False,
    access_expires_delta=settings.jwt_expires_delta,
)


def create_access_token(user_id: int, role: str) -> str:
    subject = {"id": user_id, "role": role}
    return access_security.create_access_token(
        subject=subject,
        expires_delta=settings.jwt_expires_delta,
    )
