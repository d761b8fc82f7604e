# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Centraliza lo que se inyecta en los endpoints:
- la sesión asíncrona de base de datos (una por petición)
- los servicios de dominio construidos con esa sesión
- el usuario autenticado a partir del token Bearer
"""

from typing import AsyncGenerator, Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.database import AsyncSessionLocal
from app.core.exceptions import AuthError
from app.db.models.user_model import User
from app.services.account_service import AccountService
from app.services.client_service import ClientRegistry
from app.services.purchase_service import PurchaseLedger

bearer_scheme = HTTPBearer(auto_error=False)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with AsyncSessionLocal() as session:
        yield session

def get_client_registry(db: AsyncSession = Depends(get_db)) -> ClientRegistry:
    return ClientRegistry(db)

def get_purchase_ledger(db: AsyncSession = Depends(get_db)) -> PurchaseLedger:
    return PurchaseLedger(db)

def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    accounts: AccountService = Depends(get_account_service),
) -> User:
    """
    Resuelve el usuario del token Bearer.

    Sin cabecera o con un token inválido responde 401.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token is required")
    return await accounts.get_user_from_token(credentials.credentials)
