# backend/app/schemas/user_schema.py
"""
Esquemas Pydantic para cuentas de usuario y autenticación.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    username: str = Field(..., description="Nombre de usuario")
    email: EmailStr = Field(..., description="Email de acceso")


class UserCreate(UserBase):
    password: str = Field(..., description="Contraseña en texto plano")


class UserUpdate(BaseModel):
    """Todos los campos son opcionales; una contraseña nueva se vuelve a hashear."""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserResponse(UserBase):
    """Nunca expone el hash de la contraseña."""
    id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserCreatedResponse(BaseModel):
    message: str
    user: UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PasswordResetRequest(BaseModel):
    email: EmailStr
