# barbershop/errors.py

from typing import Any

from fastapi import HTTPException


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=401,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidInput(HTTPException):
    def __init__(self, detail: Any):
        super().__init__(status_code=422, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)
