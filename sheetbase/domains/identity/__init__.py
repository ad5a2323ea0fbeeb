from sheetbase.domains.identity.entities import Account, Session
from sheetbase.domains.identity.schemas import (
    LoginRequest, LoginResponse, MessageResponse, SessionResponse, SignupRequest, UserOut
)

__all__ = [
    "Account", "Session",
    "LoginRequest", "LoginResponse", "MessageResponse", "SessionResponse", "SignupRequest", "UserOut",
]
