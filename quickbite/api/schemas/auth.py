"""Schemas HTTP de autenticación (login / cambio de password)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LoginReq(BaseModel):
    username: str = Field(..., max_length=50)
    password: str = Field(..., max_length=512)


class LoginRes(BaseModel):
    token: str = Field(description="Valor completo para el header Authorization")
    username: str
    expires_at: datetime


class ChangePasswordReq(BaseModel):
    username: str = Field(..., max_length=50)
    current_password: str = Field(..., max_length=512)
    new_password: str = Field(..., max_length=512)


class ChangePasswordRes(BaseModel):
    message: str
