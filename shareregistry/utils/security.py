from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt
from shareregistry.schemas.auth import AuthUser

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password, hashed)
    except ValueError:
        # stored value is not a hash this context recognises
        return False

def create_access_token(user: AuthUser, secret_key: str, expires_minutes: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode = {**user.public(), "exp": expire}
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)

def decode_token(token: str, secret_key: str) -> dict:
    return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
