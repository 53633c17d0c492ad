from fastapi import HTTPException


class InvalidEmail(HTTPException):
    def __init__(self, detail: str = "Email address is not valid"):
        super().__init__(status_code=400, detail=detail)


class WeakPassword(HTTPException):
    def __init__(self, detail: str = "Password must be at least 6 characters"):
        super().__init__(status_code=400, detail=detail)


class DuplicateAccount(HTTPException):
    def __init__(self, detail: str = "An account with this email already exists"):
        super().__init__(status_code=409, detail=detail)


class AuthenticationFailed(HTTPException):
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=401, detail=detail)


class TokenSigningFailed(HTTPException):
    def __init__(self, detail: str = "Could not generate token"):
        super().__init__(status_code=500, detail=detail)


class InvalidToken(HTTPException):
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(status_code=401, detail=detail)


class InvalidRequest(HTTPException):
    def __init__(self, detail: str = "Invalid request body"):
        super().__init__(status_code=400, detail=detail)
