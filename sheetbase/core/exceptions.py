"""
Исключения SheetBase
====================

Сервисы бросают эти исключения, а обработчик в ``sheetbase.main``
превращает их в JSON-ответ вида ``{"success": false, "message": ...}``
с кодом ``status_code``.
"""

from typing import Any, Dict


class SheetBaseError(Exception):
    """Базовое исключение приложения"""

    status_code = 500
    default_message = "Something went wrong!"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message}


class ValidationError(SheetBaseError):
    """Отсутствующие или некорректные поля запроса"""

    status_code = 400
    default_message = "Invalid request"


class AuthError(SheetBaseError):
    """Неверные учетные данные или нет активной сессии"""

    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(SheetBaseError):
    status_code = 404
    default_message = "Not found"


class AccountNotFoundError(NotFoundError):
    """Пользователь не найден при входе (отдается как 401)"""

    status_code = 401
    default_message = "User not found"


class SheetNotFoundError(NotFoundError):
    default_message = "Sheet not found!"


class ConflictError(SheetBaseError):
    status_code = 409
    default_message = "Resource already exists"


class UsernameTakenError(ConflictError):
    default_message = "Username already exists"


class SheetAlreadyExistsError(ConflictError):
    """Дубликат листа - отдается как 200 с success=false"""

    status_code = 200
    default_message = "Sheet already exists!"


class StorageError(SheetBaseError):
    """Ошибка хранилища"""

    status_code = 500
    default_message = "Internal server error"
