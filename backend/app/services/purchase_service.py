# backend/app/services/purchase_service.py
"""
Servicio del libro de pedidos (Purchase Ledger).

Además del CRUD de pedidos, mantiene el contador desnormalizado
`purchase_count` del cliente referenciado. Cada ajuste del contador se emite
DESPUÉS de confirmar la escritura principal y en su propia transacción:

    borrar pedido (commit) -> decrementar contador (commit aparte)

Si el ajuste falla, la operación principal sigue siendo un éxito para quien
llama; el fallo se registra en el log y el contador queda desalineado hasta
una reconciliación explícita (ClientRegistry.reconcile_purchase_count).
No hay bloqueos ni reintentos: dos borrados concurrentes del mismo cliente
compiten sobre el contador.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.crud import client_crud, purchase_crud
from app.db.models.purchase_model import Purchase
from app.schemas import client_schema, purchase_schema

logger = logging.getLogger(__name__)

# Campos cuyos sub-documentos se guardan como JSON
_JSON_FIELDS = ("address", "prescription")


def _to_store(data: Dict[str, Any]) -> Dict[str, Any]:
    """Convierte los valores del esquema a lo que espera el modelo ORM."""
    out = dict(data)
    for field in _JSON_FIELDS:
        value = out.get(field)
        if isinstance(value, dict):
            out[field] = {k: v for k, v in value.items() if v is not None} or None
    if out.get("payment_method") is not None:
        out["payment_method"] = purchase_schema.PaymentMethod(out["payment_method"]).value
    return out


class PurchaseLedger:
    """Operaciones sobre pedidos ligadas a una sesión de base de datos."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def get_by_id(self, purchase_id: str) -> Purchase:
        if not purchase_id:
            raise ValidationError("ID is required")
        purchase = await purchase_crud.get_purchase(self.db, purchase_id)
        if not purchase:
            raise NotFoundError("Purchase not found")
        return purchase

    async def get_detail(self, purchase_id: str) -> purchase_schema.PurchaseDetail:
        """
        Obtiene un pedido con su cliente resuelto.

        El cruce es de mejor esfuerzo: si el cliente referenciado ya no existe
        el campo `client` queda a null y la lectura no falla.
        """
        purchase = await self.get_by_id(purchase_id)
        client = await client_crud.get_client(self.db, purchase.client_id)

        detail = purchase_schema.PurchaseDetail.model_validate(purchase)
        if client:
            detail.client = client_schema.ClientResponse.model_validate(client)
        return detail

    async def list_all(self) -> List[Purchase]:
        """Todos los pedidos por fecha de compra descendente."""
        return await purchase_crud.get_purchases(self.db)

    async def list_by_client(self, client_id: str) -> List[Purchase]:
        """
        Pedidos de un cliente por fecha de compra descendente.

        Sin coincidencias devuelve una lista vacía, nunca NotFoundError.
        """
        if not client_id:
            raise ValidationError("Client ID is required")
        return await purchase_crud.get_purchases_by_client(self.db, client_id)

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create(self, purchase_in: purchase_schema.PurchaseCreate) -> Purchase:
        """
        Registra un pedido.

        Requiere cliente, importe positivo y al menos una forma de detalle
        (`details` o `payment_method`). No comprueba que el cliente exista.
        """
        data = purchase_in.model_dump()

        client_id = (data.get("client_id") or "").strip()
        has_details = bool((data.get("details") or "").strip()) or data.get("payment_method") is not None
        if not client_id or not has_details or not data.get("total_amount"):
            raise ValidationError("Missing required fields")
        if data["total_amount"] <= 0:
            raise ValidationError("Total amount must be positive")

        data["client_id"] = client_id
        if data.get("purchase_date") is None:
            data["purchase_date"] = datetime.now(timezone.utc)
        if data.get("purchase_status") is None:
            data["purchase_status"] = False
        if data.get("deposit") is None:
            data["deposit"] = 0

        purchase = await purchase_crud.create_purchase(self.db, _to_store(data))
        logger.info(f"Pedido {purchase.id} creado para el cliente {client_id}")
        # Desligado de la sesión para que un rollback del ajuste no lo expire
        self.db.expunge(purchase)

        await self._adjust_counter(client_id, +1, purchase.id)
        return purchase

    async def update_by_id(self, purchase_id: str, purchase_in: purchase_schema.PurchaseUpdate) -> Purchase:
        """
        Aplica solo los campos enviados y valida el resultado de la mezcla.

        Si cambia el cliente, el pedido se descuenta del anterior y se suma al
        nuevo, ambos con la misma política de mejor esfuerzo que el borrado.
        """
        update_data = purchase_in.model_dump(exclude_unset=True)
        if not update_data:
            raise ValidationError("Missing required fields")

        purchase = await self.get_by_id(purchase_id)

        merged_client = update_data.get("client_id", purchase.client_id)
        merged_client = merged_client.strip() if isinstance(merged_client, str) else merged_client
        merged_total = update_data.get("total_amount", purchase.total_amount)
        if not merged_client:
            raise ValidationError("Client reference cannot be empty")
        if merged_total is None or merged_total <= 0:
            raise ValidationError("Total amount must be positive")
        for field in ("purchase_status", "purchase_date"):
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"{field} cannot be null")
        if "client_id" in update_data:
            update_data["client_id"] = merged_client
        if "deposit" in update_data and update_data["deposit"] is None:
            update_data["deposit"] = 0

        previous_client = purchase.client_id
        updated = await purchase_crud.update_purchase(self.db, purchase, _to_store(update_data))

        if updated.client_id != previous_client:
            self.db.expunge(updated)
            await self._adjust_counter(previous_client, -1, updated.id)
            await self._adjust_counter(updated.client_id, +1, updated.id)
        return updated

    async def delete_by_id(self, purchase_id: str) -> Purchase:
        """
        Elimina el pedido y luego, con mejor esfuerzo, decrementa el contador
        del cliente (sin bajar de cero).

        Un fallo en el decremento no se propaga: el borrado ya está confirmado.
        """
        purchase = await self.get_by_id(purchase_id)
        client_id = purchase.client_id

        deleted = await purchase_crud.delete_purchase(self.db, purchase)
        logger.info(f"Pedido {purchase_id} eliminado")

        await self._adjust_counter(client_id, -1, purchase_id)
        return deleted

    # ========================================
    # CONTADOR DESNORMALIZADO
    # ========================================

    async def _adjust_counter(self, client_id: str, delta: int, purchase_id: str) -> None:
        try:
            await client_crud.adjust_purchase_count(self.db, client_id, delta)
        except SQLAlchemyError as e:
            logger.error(
                f"No se pudo ajustar ({delta:+d}) el contador del cliente {client_id} "
                f"tras operar el pedido {purchase_id}: {e}",
                exc_info=True,
            )
            await self.db.rollback()
