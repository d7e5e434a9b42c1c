from pydantic import BaseModel

from .user import GoogleUser


class AuthUrlResponse(BaseModel):
    success: bool = True
    auth_url: str


class VerifyResponse(BaseModel):
    success: bool = True
    user: GoogleUser


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "로그아웃되었습니다."
