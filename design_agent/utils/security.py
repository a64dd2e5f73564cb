
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from passlib.context import CryptContext
from jose import jwt, JWTError
from design_agent.errors import InvalidToken

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")

class Role(str, Enum):
    USER = "user"
    SUPER_ADMIN = "super_admin"

@dataclass(frozen=True)
class Principal:
    user_id: str
    role: Role

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)

class CredentialService:
    """Issues and verifies signed session tokens carrying a user id and role."""

    def __init__(self, secret_key: str, expire_minutes: int):
        self.secret_key = secret_key
        self.expire_minutes = expire_minutes

    def issue(self, user_id: str, role: Role, expires_minutes: int | None = None) -> str:
        expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or self.expire_minutes)
        to_encode = {"sub": user_id, "role": Role(role).value, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> Principal:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except JWTError as e:
            raise InvalidToken(str(e)) from e

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidToken("token has no subject")
        try:
            role = Role(payload.get("role"))
        except ValueError:
            raise InvalidToken("token carries an unknown role") from None
        return Principal(user_id=user_id, role=role)
