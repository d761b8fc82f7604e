# backend/app/api/v1/endpoints/users.py
"""
Endpoints de cuentas de usuario: alta, login, restablecimiento y CRUD.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, status
from typing import List
import logging

from app.api import deps
from app.schemas import common_schema, user_schema
from app.services import email_service
from app.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=user_schema.UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    *,
    accounts: AccountService = Depends(deps.get_account_service),
    background_tasks: BackgroundTasks,
    user_in: user_schema.UserCreate,
) -> user_schema.UserCreatedResponse:
    """Crea una cuenta y programa el correo de bienvenida en segundo plano."""
    logger.info(f"🆕 USUARIO: Creando cuenta para '{user_in.email}'")
    user = await accounts.create_account(user_in)
    background_tasks.add_task(email_service.send_welcome_email, user.email, user.username)
    return user_schema.UserCreatedResponse(
        message="User created successfully",
        user=user_schema.UserResponse.model_validate(user),
    )


@router.post("/login", response_model=user_schema.Token)
async def login_user(
    *,
    accounts: AccountService = Depends(deps.get_account_service),
    credentials: user_schema.LoginRequest,
) -> user_schema.Token:
    """Devuelve un token de acceso para credenciales válidas."""
    access_token = await accounts.authenticate(str(credentials.email), credentials.password)
    return user_schema.Token(access_token=access_token)


@router.post("/password-reset", response_model=common_schema.MessageResponse, status_code=status.HTTP_202_ACCEPTED)
async def request_password_reset(
    *,
    accounts: AccountService = Depends(deps.get_account_service),
    background_tasks: BackgroundTasks,
    reset_in: user_schema.PasswordResetRequest,
) -> common_schema.MessageResponse:
    """Envía un enlace de restablecimiento si el email existe; la respuesta es la misma en ambos casos."""
    token = await accounts.issue_password_reset(str(reset_in.email))
    if token:
        background_tasks.add_task(email_service.send_password_reset_email, str(reset_in.email), token)
    return common_schema.MessageResponse(message="If the email is registered, a reset link has been sent")


@router.get("/", response_model=List[user_schema.UserResponse])
async def read_users(
    accounts: AccountService = Depends(deps.get_account_service),
) -> List[user_schema.UserResponse]:
    return await accounts.list_all()


@router.get("/{user_id}", response_model=user_schema.UserResponse)
async def read_user(
    *,
    accounts: AccountService = Depends(deps.get_account_service),
    user_id: str,
) -> user_schema.UserResponse:
    return await accounts.get_by_id(user_id)


@router.put("/{user_id}", response_model=user_schema.UserResponse)
async def update_user(
    *,
    accounts: AccountService = Depends(deps.get_account_service),
    user_id: str,
    user_in: user_schema.UserUpdate,
) -> user_schema.UserResponse:
    return await accounts.update_by_id(user_id, user_in)


@router.delete("/{user_id}", response_model=common_schema.MessageResponse)
async def delete_user(
    *,
    accounts: AccountService = Depends(deps.get_account_service),
    user_id: str,
) -> common_schema.MessageResponse:
    await accounts.delete_by_id(user_id)
    return common_schema.MessageResponse(message="User deleted successfully")
