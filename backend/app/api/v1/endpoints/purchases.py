# backend/app/api/v1/endpoints/purchases.py
"""
Endpoints REST para el registro de pedidos.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import logging

from app.api import deps
from app.schemas import common_schema, purchase_schema
from app.services.purchase_service import PurchaseLedger

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=purchase_schema.PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def create_purchase(
    *,
    ledger: PurchaseLedger = Depends(deps.get_purchase_ledger),
    purchase_in: purchase_schema.PurchaseCreate,
) -> purchase_schema.PurchaseResponse:
    """Registra un nuevo pedido para un cliente."""
    logger.info(f"🆕 PEDIDO: Creando pedido para el cliente '{purchase_in.client_id}'")
    purchase = await ledger.create(purchase_in)
    logger.info(f"✅ PEDIDO: Creado {purchase.id}")
    return purchase


@router.get("/", response_model=List[purchase_schema.PurchaseResponse])
async def read_purchases(
    ledger: PurchaseLedger = Depends(deps.get_purchase_ledger),
) -> List[purchase_schema.PurchaseResponse]:
    """Obtiene todos los pedidos, del más reciente al más antiguo."""
    return await ledger.list_all()


@router.get("/client/{client_id}", response_model=List[purchase_schema.PurchaseResponse])
async def read_purchases_by_client(
    *,
    ledger: PurchaseLedger = Depends(deps.get_purchase_ledger),
    client_id: str,
) -> List[purchase_schema.PurchaseResponse]:
    """Obtiene los pedidos de un cliente. Sin pedidos responde una lista vacía."""
    return await ledger.list_by_client(client_id)


@router.get("/{purchase_id}", response_model=purchase_schema.PurchaseDetail)
async def read_purchase(
    *,
    ledger: PurchaseLedger = Depends(deps.get_purchase_ledger),
    purchase_id: str,
) -> purchase_schema.PurchaseDetail:
    """Obtiene un pedido con su cliente resuelto (null si ya no existe)."""
    return await ledger.get_detail(purchase_id)


@router.put("/{purchase_id}", response_model=purchase_schema.PurchaseResponse)
async def update_purchase(
    *,
    ledger: PurchaseLedger = Depends(deps.get_purchase_ledger),
    purchase_id: str,
    purchase_in: purchase_schema.PurchaseUpdate,
) -> purchase_schema.PurchaseResponse:
    """Enmienda los campos enviados de un pedido."""
    logger.info(f"🔄 PEDIDO: Actualizando pedido {purchase_id}")
    return await ledger.update_by_id(purchase_id, purchase_in)


@router.delete("/{purchase_id}", response_model=common_schema.MessageResponse)
async def delete_purchase(
    *,
    ledger: PurchaseLedger = Depends(deps.get_purchase_ledger),
    purchase_id: str,
) -> common_schema.MessageResponse:
    """Cancela un pedido y descuenta una compra del contador del cliente."""
    logger.info(f"🗑️ PEDIDO: Eliminando pedido {purchase_id}")
    await ledger.delete_by_id(purchase_id)
    return common_schema.MessageResponse(message="Purchase deleted successfully")
