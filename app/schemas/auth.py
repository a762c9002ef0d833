from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel


class LoginRequest(CamelModel):
    email: Optional[str] = Field(default=None, examples=["alice@myco.vn"])


class ManualLoginRequest(CamelModel):
    email: Optional[str] = Field(default=None, examples=["alice@myco.vn"])
    password: Optional[str] = None


class LoginProfileOut(CamelModel):
    full_name: str
    email: str


class ManualLoginResponse(CamelModel):
    success: bool = True
    pic_info: LoginProfileOut
