# backend/app/services/account_service.py
"""
Servicio de cuentas de usuario.

Frontera con la autenticación: alta de cuentas con contraseña hasheada,
inicio de sesión con emisión de token y el CRUD de usuarios. El hash y el
formato del token se delegan en app.core.security.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core import security
from app.core.config import settings
from app.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from app.crud import user_crud
from app.db.models.user_model import User
from app.schemas import user_schema

logger = logging.getLogger(__name__)


class AccountService:
    """Operaciones de cuentas ligadas a una sesión de base de datos."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_account(self, user_in: user_schema.UserCreate) -> User:
        """
        Crea una cuenta nueva.

        La notificación de bienvenida NO se envía aquí: el endpoint la programa
        como tarea en segundo plano para que su fallo no afecte al alta.
        """
        if not user_in.username or not user_in.username.strip() or not user_in.password:
            raise ValidationError("All fields are required")

        email = str(user_in.email)
        if await user_crud.get_user_by_email(self.db, email):
            raise ConflictError("Email already registered")

        user = await user_crud.create_user(
            self.db,
            username=user_in.username.strip(),
            email=email,
            password_hash=security.hash_password(user_in.password),
        )
        logger.info(f"Cuenta creada: {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> str:
        """Verifica credenciales y devuelve un token de acceso firmado."""
        user = await user_crud.get_user_by_email(self.db, email)
        if not user or not security.verify_password(password, user.password_hash):
            raise AuthError("Invalid credentials")
        return security.create_access_token(user.id, {"email": user.email})

    async def issue_password_reset(self, email: str) -> Optional[str]:
        """
        Emite un token corto de restablecimiento si el email pertenece a una cuenta.

        Devuelve None para emails desconocidos; quien llama no debe revelarlo.
        """
        user = await user_crud.get_user_by_email(self.db, email)
        if not user:
            return None
        return security.create_access_token(
            user.id,
            {"purpose": "password_reset"},
            expires_minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES,
        )

    async def get_user_from_token(self, token: str) -> User:
        payload = security.decode_access_token(token)
        if payload.get("purpose"):
            raise AuthError("Invalid token")
        user = await user_crud.get_user(self.db, payload["sub"])
        if not user:
            raise AuthError("Invalid token")
        return user

    # ========================================
    # CRUD DE USUARIOS
    # ========================================

    async def get_by_id(self, user_id: str) -> User:
        if not user_id:
            raise ValidationError("User ID is required")
        user = await user_crud.get_user(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def list_all(self) -> List[User]:
        return await user_crud.get_users(self.db)

    async def update_by_id(self, user_id: str, user_in: user_schema.UserUpdate) -> User:
        user = await self.get_by_id(user_id)
        update_data = user_in.model_dump(exclude_unset=True)

        password = update_data.pop("password", None)
        if password:
            update_data["password_hash"] = security.hash_password(password)
        if update_data.get("email") is not None:
            update_data["email"] = str(update_data["email"])
        for field in ("username", "email"):
            if field in update_data and not update_data[field]:
                raise ValidationError(f"{field} cannot be empty")

        return await user_crud.update_user(self.db, user, update_data)

    async def delete_by_id(self, user_id: str) -> User:
        user = await self.get_by_id(user_id)
        return await user_crud.delete_user(self.db, user)
