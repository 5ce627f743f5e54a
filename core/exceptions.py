from fastapi import HTTPException, status

class AppException(HTTPException):
    def __init__(self, status_code: int, detail, headers: dict | None = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class AuthError(AppException):
    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )

class MissingTokenError(AuthError):
    def __init__(self):
        super().__init__("Authorization token missing")

class InvalidTokenError(AuthError):
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)

class ForbiddenError(AppException):
    def __init__(self, detail: str = "Forbidden access"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class NotFoundError(AppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class ValidationError(AppException):
    def __init__(self, detail):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class UpstreamFailure(AppException):
    """Store or card network failure. 500 for the store, 502 for the card network."""
    def __init__(self, detail="Internal Server Error", status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)
