from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError, ExpiredSignatureError
from core.exceptions import MissingTokenError, InvalidTokenError
from utils.logger import get_logger

logger = get_logger("JWT_HANDLER")

class TokenService:
    """
    Issues and verifies signed identity tokens. Expiry is the only lifetime bound,
    there is no revocation list.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: dict, expires_delta: timedelta | None = None) -> str:
        """
        Creates a JWT for the given identity claims. `email` is required.
        """
        if not claims.get("email"):
            raise ValueError("Identity claims must contain an email")
        logger.info("Access token creation requested")
        to_encode = claims.copy()
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))
        to_encode.update({"exp": expire, "iat": now})
        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.info(f"Access token created successfully with expiry {expire}")
        return encoded_jwt

    def verify(self, token: str | None) -> dict:
        """
        Decode token and return its claims.
        Raises MissingTokenError when no token is given, InvalidTokenError otherwise.
        """
        if not token:
            raise MissingTokenError()
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token expired")
            raise InvalidTokenError("Token expired")
        except JWTError:
            logger.warning("JWT Error: Invalid token")
            raise InvalidTokenError()
        if not payload.get("email"):
            logger.warning("Email not found in token")
            raise InvalidTokenError("Invalid token: no email found")
        return payload
