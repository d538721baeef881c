from pydantic import BaseModel


class LoginIn(BaseModel):
    email: str
    password: str


class RefreshIn(BaseModel):
    refreshToken: str | None = None


class TokenOut(BaseModel):
    accessToken: str


class LoginOut(TokenOut):
    user: dict
    refreshToken: str
