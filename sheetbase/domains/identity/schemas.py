from typing import Optional

from pydantic import BaseModel


class Credentials(BaseModel):
    """Имя и пароль; наличие полей проверяет сервис"""
    username: Optional[str] = None
    password: Optional[str] = None


class SignupRequest(Credentials):
    pass


class LoginRequest(Credentials):
    pass


class UserOut(BaseModel):
    id: str
    username: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    user: UserOut


class SessionResponse(BaseModel):
    success: bool = True
    user: UserOut


class MessageResponse(BaseModel):
    message: str
