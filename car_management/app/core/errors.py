"""
Иерархия ошибок приложения.

Каждая ошибка знает свой HTTP-статус, перевод в ответ делают
обработчики в api/errors.py.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    code: str = "APP_ERROR"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationError(AppError):
    """Невалидное поле запроса. Ловится до любого обращения к БД."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class Unauthenticated(AppError):
    code = "UNAUTHENTICATED"
    status_code = 401


class SigningError(AppError):
    code = "SIGNING_ERROR"
    status_code = 500


class InvalidIdentity(AppError):
    code = "INVALID_IDENTITY"
    status_code = 400


class NotFound(AppError):
    code = "NOT_FOUND"
    status_code = 404


class PersistenceError(AppError):
    code = "PERSISTENCE_ERROR"
    status_code = 500
