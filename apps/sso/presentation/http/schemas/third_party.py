"""Third-party HTTP Schemas."""

from pydantic import BaseModel, Field


class BindAccountRequest(BaseModel):
    """기존 계정 연결 요청."""

    code: str = Field(..., description="콜백 리다이렉트로 받은 bind code")
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CreateAccountRequest(BaseModel):
    """신규 계정 생성 요청."""

    code: str = Field(..., description="콜백 리다이렉트로 받은 bind code")
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=8, max_length=128)
    nickname: str | None = Field(None, max_length=64)
    avatar_url: str | None = Field(None, max_length=512)
