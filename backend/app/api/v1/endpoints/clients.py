# backend/app/api/v1/endpoints/clients.py
"""
Endpoints REST para operaciones CRUD de clientes.

Registrar, leer, actualizar y borrar un cliente requiere un token Bearer;
el listado completo es público.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import logging

from app.api import deps
from app.db.models.user_model import User
from app.schemas import client_schema, common_schema, purchase_schema
from app.services.client_service import ClientRegistry

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=client_schema.ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    *,
    registry: ClientRegistry = Depends(deps.get_client_registry),
    current_user: User = Depends(deps.get_current_user),
    client_in: client_schema.ClientCreate,
) -> client_schema.ClientResponse:
    """Registra un nuevo cliente."""
    logger.info(f"🆕 CLIENTE: Registrando cliente '{client_in.name}'")
    client = await registry.register(client_in)
    logger.info(f"✅ CLIENTE: Registrado {client.id}")
    return client


@router.get("/", response_model=List[client_schema.ClientResponse])
async def read_clients(
    registry: ClientRegistry = Depends(deps.get_client_registry),
) -> List[client_schema.ClientResponse]:
    """Obtiene todos los clientes."""
    return await registry.list_all()


@router.get("/{client_id}", response_model=client_schema.ClientResponse)
async def read_client(
    *,
    registry: ClientRegistry = Depends(deps.get_client_registry),
    current_user: User = Depends(deps.get_current_user),
    client_id: str,
) -> client_schema.ClientResponse:
    """Obtiene los detalles de un cliente por su ID."""
    return await registry.get_by_id(client_id)


@router.put("/{client_id}", response_model=client_schema.ClientResponse)
async def update_client(
    *,
    registry: ClientRegistry = Depends(deps.get_client_registry),
    current_user: User = Depends(deps.get_current_user),
    client_id: str,
    client_in: client_schema.ClientUpdate,
) -> client_schema.ClientResponse:
    """Actualiza los campos enviados de un cliente."""
    logger.info(f"🔄 CLIENTE: Actualizando cliente {client_id}")
    return await registry.update_by_id(client_id, client_in)


@router.delete("/{client_id}", response_model=common_schema.MessageResponse)
async def delete_client(
    *,
    registry: ClientRegistry = Depends(deps.get_client_registry),
    current_user: User = Depends(deps.get_current_user),
    client_id: str,
) -> common_schema.MessageResponse:
    """Elimina un cliente. Sus pedidos no se borran."""
    logger.info(f"🗑️ CLIENTE: Eliminando cliente {client_id}")
    await registry.delete_by_id(client_id)
    return common_schema.MessageResponse(message="Client deleted successfully")


@router.get("/{client_id}/purchases", response_model=purchase_schema.ClientWithPurchases)
async def read_client_with_purchases(
    *,
    registry: ClientRegistry = Depends(deps.get_client_registry),
    current_user: User = Depends(deps.get_current_user),
    client_id: str,
) -> purchase_schema.ClientWithPurchases:
    """Obtiene un cliente junto con todos sus pedidos."""
    return await registry.get_with_purchases(client_id)


@router.post("/{client_id}/reconcile", response_model=client_schema.ClientResponse)
async def reconcile_client_purchase_count(
    *,
    registry: ClientRegistry = Depends(deps.get_client_registry),
    current_user: User = Depends(deps.get_current_user),
    client_id: str,
) -> client_schema.ClientResponse:
    """Recalcula el contador de compras del cliente a partir de sus pedidos."""
    logger.info(f"🔧 CLIENTE: Reconciliando contador de compras de {client_id}")
    return await registry.reconcile_purchase_count(client_id)
