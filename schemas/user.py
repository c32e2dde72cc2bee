from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from db.models import Role
from schemas.base import CamelModel


class UserBase(CamelModel):
    id: int
    name: str
    email: str
    user_role: Role


class UserSummary(CamelModel):
    id: int
    name: str


class UserContact(CamelModel):
    id: int
    name: str
    email: str


class RegisterUser(CamelModel):
    name: str = Field(min_length=2, max_length=100, description='유저 이름', examples=['Marko Markovic'])
    email: EmailStr = Field(description='로그인에 사용할 이메일', examples=['marko@stayhub.com'])
    password: str = Field(min_length=6, max_length=200, description='비밀번호', examples=['Password123!'])

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class LoginUser(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class AuthOutput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    user: UserBase


class MeOutput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    user: Optional[UserBase] = None


class TokenPayload(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: int
    role: Role
    exp: int
