from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenRead(BaseModel):
    token: str
    token_type: str = Field("bearer", alias="tokenType")
    expires_at: datetime = Field(..., alias="expiresAt")

    class Config:
        populate_by_name = True
